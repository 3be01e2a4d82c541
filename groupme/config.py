"""
Environment configuration for the GroupMe command-line tool.
The library never reads the environment itself; the token is handed to GroupMeAPI explicitly.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

ACCESS_TOKEN_KEY = "GROUPME_TOKEN"

def load_access_token(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the GroupMe access token.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading a .env file.

    Raises:
        ConfigurationError: If the token is missing or empty
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    token = environ.get(ACCESS_TOKEN_KEY)
    if not token:
        raise ConfigurationError(f"Must set access token environment variable '{ACCESS_TOKEN_KEY}'.")
    return token
