import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ApiError, DecodeError, TransportError, ValidationError
from .types import (
    ErrorEnvelope,
    Group,
    GroupCreateRequest,
    GroupEnvelope,
    GroupListEnvelope,
    GroupUpdateRequest,
    Message,
    MessageIndexEnvelope,
    NestedGroupEnvelope,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://api.groupme.com/v3"

MAX_GROUP_NAME_LENGTH = 140
MAX_GROUP_DESCRIPTION_LENGTH = 255
MAX_MESSAGES_LIMIT = 100

E = TypeVar('E', bound=BaseModel)

class GroupMeAPI:
    """
    Performs single round trips against the GroupMe API.
    The access token, base URL and timeout are fixed for the lifetime of the instance.
    """

    def __init__(self, access_token: str, base_url: str = BASE_URL, timeout: float = 30.0, transport: httpx.BaseTransport = None):
        if not access_token:
            raise ValueError("GroupMe access token is required")
        self.access_token = access_token
        self.url = base_url

        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "GroupMeAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def request(self, method: str, path: str, params: dict = None, json: Any = None) -> httpx.Response:
        request = self.client.build_request(method, path, params=params, json=json)
        return self.execute(request)

    def execute(self, request: httpx.Request) -> httpx.Response:
        """
        Send the request with the access token and JSON content type set.
        Responses below 400 are returned unread and must be closed by the caller.
        Anything else is raised as an ApiError, or a DecodeError if the error body is unreadable.
        """
        request.url = request.url.copy_set_param("token", self.access_token)
        request.headers["Content-Type"] = "application/json"

        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = self.client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"{request.method} {request.url.path} failed: {e}") from e

        if response.status_code < 400:
            return response

        body = _read(response)
        try:
            envelope = ErrorEnvelope.model_validate_json(body)
        except PydanticValidationError as e:
            raise DecodeError(f"cannot decode {response.status_code} error response for {request.method} {request.url.path}") from e

        code = envelope.meta.code if envelope.meta.code is not None else response.status_code
        logger.warning(f"{request.method} {request.url.path} returned {response.status_code}: {envelope.meta.errors}")
        raise ApiError(code, envelope.meta.errors, status_code=response.status_code)

def _read(response: httpx.Response) -> bytes:
    try:
        return response.read()
    except httpx.RequestError as e:
        raise TransportError(f"reading response body failed: {e}") from e
    finally:
        response.close()

def _decode(response: httpx.Response, envelope: Type[E]) -> E:
    body = _read(response)
    try:
        return envelope.model_validate_json(body)
    except PydanticValidationError as e:
        raise DecodeError(f"unexpected response for {envelope.__name__}: {e}") from e

def _segment(value: str) -> str:
    return quote(value, safe='')

class ResourceAPI:
    def __init__(self, api: GroupMeAPI):
        self.api = api

### GROUPS

@dataclass
class GroupsIndexOptions:
    # Zero based, sent as the 1-based 'page' parameter. Zero leaves the server default.
    offset: int = 0
    # Zero leaves the server default.
    limit: int = 0
    omit: List[str] = field(default_factory=list)

def _validate_group(operation: str, request: GroupCreateRequest) -> None:
    if not request.name:
        raise ValidationError(f"{operation}: group name is required")
    if len(request.name) > MAX_GROUP_NAME_LENGTH:
        raise ValidationError(f"{operation}: group name length maximum is {MAX_GROUP_NAME_LENGTH} characters")
    if request.description is not None and len(request.description) > MAX_GROUP_DESCRIPTION_LENGTH:
        raise ValidationError(f"{operation}: group description length maximum is {MAX_GROUP_DESCRIPTION_LENGTH} characters")

class GroupsAPI(ResourceAPI):

    def index(self, options: Optional[GroupsIndexOptions] = None) -> List[Group]:
        """List the authenticated user's active groups."""
        if options is None:
            options = GroupsIndexOptions()

        params = {}
        if options.offset != 0:
            params["page"] = options.offset + 1
        if options.limit != 0:
            params["per_page"] = options.limit
        if options.omit:
            params["omit"] = ",".join(options.omit)

        response = self.api.request("GET", "/groups", params=params)
        return _decode(response, GroupListEnvelope).groups

    def former(self) -> List[Group]:
        """List groups the user has left but can rejoin."""
        response = self.api.request("GET", "/groups/former")
        return _decode(response, GroupListEnvelope).groups

    def show(self, group_id: str) -> Group:
        response = self.api.request("GET", f"/groups/{_segment(group_id)}")
        return _decode(response, GroupEnvelope).group

    def create(self, request: GroupCreateRequest) -> Group:
        _validate_group("GroupsAPI.create", request)
        response = self.api.request("POST", "/groups", json=request.model_dump(exclude_none=True))
        return _decode(response, GroupEnvelope).group

    def update(self, group_id: str, request: GroupUpdateRequest) -> Group:
        _validate_group("GroupsAPI.update", request)
        response = self.api.request("POST", f"/groups/{_segment(group_id)}/update", json=request.model_dump(exclude_none=True))
        return _decode(response, GroupEnvelope).group

    def destroy(self, group_id: str) -> None:
        """Disband a group. Only available to the group creator."""
        _read(self.api.request("POST", f"/groups/{_segment(group_id)}/destroy"))

    def join(self, group_id: str, share_token: str) -> Group:
        """Join a shared group using the token from its share URL."""
        response = self.api.request("POST", f"/groups/{_segment(group_id)}/join/{_segment(share_token)}")
        return _decode(response, NestedGroupEnvelope).group

    def rejoin(self, group_id: str) -> Group:
        """Rejoin a group. Only works if the user previously left it."""
        response = self.api.request("POST", "/groups/join", params={"group_id": group_id})
        return _decode(response, NestedGroupEnvelope).group

### MESSAGES

@dataclass
class MessagesIndexOptions:
    before_id: str = ""
    since_id: str = ""
    after_id: str = ""
    # Default is 20, maximum is 100. Zero leaves the server default.
    limit: int = 0

class MessagesAPI(ResourceAPI):

    def index(self, group_id: str, options: Optional[MessagesIndexOptions] = None) -> List[Message]:
        """List messages of a group in the order the server returns them."""
        if options is None:
            options = MessagesIndexOptions()

        params = {}
        if options.before_id:
            params["before_id"] = options.before_id
        if options.since_id:
            params["since_id"] = options.since_id
        if options.after_id:
            params["after_id"] = options.after_id
        if options.limit != 0:
            if options.limit > MAX_MESSAGES_LIMIT:
                raise ValidationError(f"MessagesAPI.index: page limit maximum is {MAX_MESSAGES_LIMIT}")
            params["limit"] = options.limit

        response = self.api.request("GET", f"/groups/{_segment(group_id)}/messages", params=params)
        if response.status_code == httpx.codes.NOT_MODIFIED:
            _read(response)
            return []
        return _decode(response, MessageIndexEnvelope).messages

### LIKES

class LikesAPI(ResourceAPI):

    def create(self, conversation_id: str, message_id: str) -> None:
        _read(self.api.request("POST", f"/messages/{_segment(conversation_id)}/{_segment(message_id)}/like"))

    def destroy(self, conversation_id: str, message_id: str) -> None:
        _read(self.api.request("POST", f"/messages/{_segment(conversation_id)}/{_segment(message_id)}/unlike"))

### NOT YET IMPLEMENTED

class MembersAPI(ResourceAPI):
    pass

class ChatsAPI(ResourceAPI):
    pass

class DirectMessagesAPI(ResourceAPI):
    pass

class LeaderboardAPI(ResourceAPI):
    pass

class BotsAPI(ResourceAPI):
    pass

class UsersAPI(ResourceAPI):
    pass

class SmsAPI(ResourceAPI):
    pass

class BlocksAPI(ResourceAPI):
    pass
