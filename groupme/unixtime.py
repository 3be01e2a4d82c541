import math
import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INTEGER = re.compile(rb'[+-]?[0-9]+')

class FormatError(ValueError):
    """Raised when a value is not a base-10 count of Unix seconds."""

    def __init__(self, data: bytes | str, reason: str = "invalid syntax"):
        self.data = data
        self.reason = reason
        super().__init__(f"cannot parse {data!r} as Unix seconds: {reason}")

def encode(t: datetime) -> bytes:
    """Encode an instant as the decimal ASCII count of seconds since the epoch."""
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return str(math.floor(t.timestamp())).encode('ascii')

def decode(data: bytes | str) -> datetime:
    """Decode a decimal count of seconds since the epoch into a UTC datetime."""
    raw = data.encode('ascii', errors='replace') if isinstance(data, str) else bytes(data)
    if not _INTEGER.fullmatch(raw):
        raise FormatError(data)
    try:
        return EPOCH + timedelta(seconds=int(raw, 10))
    except OverflowError as e:
        raise FormatError(data, "value out of range") from e

def _validate(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise FormatError(repr(value))
    if isinstance(value, int):
        return decode(str(value))
    if isinstance(value, (str, bytes)):
        return decode(value)
    raise FormatError(repr(value), f"unsupported type {type(value).__name__}")

def _serialize(value: datetime) -> int:
    return int(encode(value))

# Wire timestamps are JSON integers of Unix seconds.
UnixTime = Annotated[datetime, PlainValidator(_validate), PlainSerializer(_serialize, return_type=int)]
