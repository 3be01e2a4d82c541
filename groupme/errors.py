from typing import List

from .unixtime import FormatError

class GroupMeError(Exception):
    """Base class for every error raised by the GroupMe client."""

class ConfigurationError(GroupMeError):
    pass

class ValidationError(GroupMeError, ValueError):
    """A request violates a local constraint and was never sent."""

class TransportError(GroupMeError):
    """The HTTP round trip itself failed (connection, timeout, ...)."""

class DecodeError(GroupMeError):
    """A response body did not have the shape expected for the operation."""

class ApiError(GroupMeError):
    """The API answered with a status code of 400 or above."""

    def __init__(self, code: int, errors: List[str], status_code: int = None):
        self.code = code
        self.errors = list(errors)
        self.status_code = status_code if status_code is not None else code
        super().__init__(f"{self.code}: {self.errors}")

__all__ = [
    "GroupMeError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "FormatError",
]
