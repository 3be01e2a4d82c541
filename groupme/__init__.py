from .api import (
    BASE_URL,
    BlocksAPI,
    BotsAPI,
    ChatsAPI,
    DirectMessagesAPI,
    GroupMeAPI,
    GroupsAPI,
    GroupsIndexOptions,
    LeaderboardAPI,
    LikesAPI,
    MembersAPI,
    MessagesAPI,
    MessagesIndexOptions,
    SmsAPI,
    UsersAPI,
)
from .errors import ApiError, ConfigurationError, DecodeError, FormatError, GroupMeError, TransportError, ValidationError
from .types import (
    Attachment,
    AttachmentType,
    EmojiAttachment,
    Group,
    GroupCreateRequest,
    GroupUpdateRequest,
    ImageAttachment,
    LocationAttachment,
    Member,
    MentionsAttachment,
    Message,
    Messages,
    Preview,
    SplitAttachment,
    UnknownAttachment,
)

__all__ = [
    "BASE_URL",
    "GroupMeAPI",
    "GroupsAPI",
    "GroupsIndexOptions",
    "MessagesAPI",
    "MessagesIndexOptions",
    "LikesAPI",
    "MembersAPI",
    "ChatsAPI",
    "DirectMessagesAPI",
    "LeaderboardAPI",
    "BotsAPI",
    "UsersAPI",
    "SmsAPI",
    "BlocksAPI",
    "GroupMeError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ApiError",
    "DecodeError",
    "FormatError",
    "Attachment",
    "AttachmentType",
    "ImageAttachment",
    "LocationAttachment",
    "MentionsAttachment",
    "SplitAttachment",
    "EmojiAttachment",
    "UnknownAttachment",
    "Group",
    "Member",
    "Messages",
    "Preview",
    "Message",
    "GroupCreateRequest",
    "GroupUpdateRequest",
]
