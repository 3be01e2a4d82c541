from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import AliasPath, BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from .unixtime import UnixTime

class AttachmentType(Enum):
    IMAGE = "image"
    LOCATION = "location"
    MENTIONS = "mentions"
    SPLIT = "split"
    EMOJI = "emoji"
    UNKNOWN = "unknown"

def _none_as_empty(value: Any, empty: Any) -> Any:
    return empty if value is None else value

### ATTACHMENTS

class AttachmentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str

    def kind(self) -> AttachmentType:
        try:
            return AttachmentType(self.type)
        except ValueError:
            return AttachmentType.UNKNOWN

    def is_image(self) -> bool:
        return self.type == AttachmentType.IMAGE.value

    def is_location(self) -> bool:
        return self.type == AttachmentType.LOCATION.value

    def is_mentions(self) -> bool:
        return self.type == AttachmentType.MENTIONS.value

    def is_split(self) -> bool:
        return self.type == AttachmentType.SPLIT.value

    def is_emoji(self) -> bool:
        return self.type == AttachmentType.EMOJI.value

class ImageAttachment(AttachmentBase):
    type: Literal["image"] = "image"
    url: Optional[str] = None

class LocationAttachment(AttachmentBase):
    type: Literal["location"] = "location"
    lat: Optional[str] = None
    lng: Optional[str] = None
    name: Optional[str] = None

class MentionsAttachment(AttachmentBase):
    """Mentioned users; loci[i] is the (start, length) of user_ids[i] in the text."""
    type: Literal["mentions"] = "mentions"
    loci: List[Tuple[int, int]] = []
    user_ids: List[str] = []

class SplitAttachment(AttachmentBase):
    type: Literal["split"] = "split"
    token: Optional[str] = None

class EmojiAttachment(AttachmentBase):
    """Emoji placeholders; each charmap entry is a (pack_id, offset) pair."""
    type: Literal["emoji"] = "emoji"
    placeholder: Optional[str] = None
    charmap: List[Tuple[int, int]] = []

class UnknownAttachment(AttachmentBase):
    """Any attachment type this client does not model. Raw fields are kept as extras."""
    model_config = ConfigDict(frozen=True, extra='allow')

    type: str = ""

def _attachment_tag(value: Any) -> str:
    if isinstance(value, UnknownAttachment):
        return AttachmentType.UNKNOWN.value
    tag = value.get('type') if isinstance(value, dict) else getattr(value, 'type', None)
    try:
        return AttachmentType(tag).value
    except ValueError:
        return AttachmentType.UNKNOWN.value

Attachment = Annotated[
    Union[
        Annotated[ImageAttachment, Tag(AttachmentType.IMAGE.value)],
        Annotated[LocationAttachment, Tag(AttachmentType.LOCATION.value)],
        Annotated[MentionsAttachment, Tag(AttachmentType.MENTIONS.value)],
        Annotated[SplitAttachment, Tag(AttachmentType.SPLIT.value)],
        Annotated[EmojiAttachment, Tag(AttachmentType.EMOJI.value)],
        Annotated[UnknownAttachment, Tag(AttachmentType.UNKNOWN.value)],
    ],
    Discriminator(_attachment_tag),
]

### GROUPS

class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    user_id: Optional[str] = None
    nickname: Optional[str] = None
    muted: bool = False
    image_url: Optional[str] = None

class Preview(BaseModel):
    model_config = ConfigDict(frozen=True)

    nickname: Optional[str] = None
    text: Optional[str] = None
    image_url: Optional[str] = None
    attachments: List[Attachment] = []

    @field_validator('attachments', mode='before')
    @classmethod
    def _null_attachments(cls, value: Any) -> Any:
        return _none_as_empty(value, [])

class Messages(BaseModel):
    """Summary of a group's messages as embedded in the group itself."""
    model_config = ConfigDict(frozen=True)

    count: int = 0
    last_message_id: Optional[str] = None
    last_message_created_at: Optional[UnixTime] = None
    preview: Optional[Preview] = None

class Group(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    creator_user_id: Optional[str] = None
    created_at: Optional[UnixTime] = None
    updated_at: Optional[UnixTime] = None
    members: List[Member] = []
    share_url: Optional[str] = None
    messages: Optional[Messages] = None

    @field_validator('members', mode='before')
    @classmethod
    def _null_members(cls, value: Any) -> Any:
        return _none_as_empty(value, [])

### MESSAGES

class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source_guid: Optional[str] = None
    created_at: Optional[UnixTime] = None
    user_id: Optional[str] = None
    group_id: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    text: Optional[str] = None
    system: bool = False
    favorited_by: List[str] = []
    attachments: List[Attachment] = []

    @field_validator('favorited_by', 'attachments', mode='before')
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return _none_as_empty(value, [])

    def likes(self) -> int:
        return len(self.favorited_by)

### REST API MODELS

class GroupCreateRequest(BaseModel):
    name: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    share: Optional[bool] = None

class GroupUpdateRequest(GroupCreateRequest):
    office_mode: Optional[bool] = None

### ENVELOPES

class ErrorMeta(BaseModel):
    code: Optional[int] = None
    errors: List[str] = []

    @field_validator('errors', mode='before')
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return _none_as_empty(value, [])

class ErrorEnvelope(BaseModel):
    meta: ErrorMeta
    # Never observed populated alongside an error, kept opaque.
    response: Dict[str, Any] = {}

    @field_validator('response', mode='before')
    @classmethod
    def _null_response(cls, value: Any) -> Any:
        return _none_as_empty(value, {})

class GroupListEnvelope(BaseModel):
    groups: List[Group] = Field(validation_alias='response')

    @field_validator('groups', mode='before')
    @classmethod
    def _null_groups(cls, value: Any) -> Any:
        return _none_as_empty(value, [])

class GroupEnvelope(BaseModel):
    group: Group = Field(validation_alias='response')

class NestedGroupEnvelope(BaseModel):
    group: Group = Field(validation_alias=AliasPath('response', 'group'))

class MessageIndexEnvelope(BaseModel):
    count: int = Field(validation_alias=AliasPath('response', 'count'), default=0)
    messages: List[Message] = Field(validation_alias=AliasPath('response', 'messages'))

    @field_validator('messages', mode='before')
    @classmethod
    def _null_messages(cls, value: Any) -> Any:
        return _none_as_empty(value, [])
