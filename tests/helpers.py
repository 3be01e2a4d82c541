import json
from typing import Any, List

import httpx

from groupme.api import GroupMeAPI

TOKEN = "secret-token"

class FakeServer:
    """Answers every request with the same canned response and records what was sent."""

    def __init__(self, status_code: int = 200, body: Any = None, content: bytes = None, error: type = None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.error = error

        self.requests: List[httpx.Request] = []
        self.responses: List[httpx.Response] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error("connection refused", request=request)
        if self.content is not None:
            content = self.content
        elif self.body is not None:
            content = json.dumps(self.body).encode()
        else:
            content = b""
        # A stream, unlike content=, is left unread and open until the client closes it.
        response = httpx.Response(self.status_code, headers={"Content-Type": "application/json"}, stream=httpx.ByteStream(content))
        self.responses.append(response)
        return response

    def api(self) -> GroupMeAPI:
        return GroupMeAPI(TOKEN, transport=httpx.MockTransport(self.handle))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_params(self) -> dict:
        params = dict(self.last.url.params)
        params.pop("token", None)
        return params

    def last_json(self) -> Any:
        return json.loads(self.last.content)
