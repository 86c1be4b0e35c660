"""Bearer credential provider for the member portal API."""
import base64
import binascii
import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Key the portal's web app stores the base64 token under inside pv.token
STORED_TOKEN_KEY = "\u0000"


class AuthenticationError(Exception):
    """Raised when no usable bearer token is available."""


def mask_token(token: Optional[str]) -> str:
    """
    Mask a token for safe logging.

    Args:
        token: Token to mask

    Returns:
        Masked token showing only the first and last 4 characters
    """
    if not token:
        return "<empty>"
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


def decode_stored_token(stored: str) -> str:
    """
    Decode the portal's localStorage "pv.token" value.

    The value is a JSON object holding the base64-encoded JWT under a
    NUL-character key.

    Args:
        stored: Raw pv.token JSON text

    Returns:
        Decoded bearer token

    Raises:
        AuthenticationError: If the payload cannot be decoded
    """
    try:
        payload = json.loads(stored)
        encoded = payload[STORED_TOKEN_KEY]
        token = base64.b64decode(encoded).decode("utf-8")
    except (ValueError, KeyError, TypeError, binascii.Error) as e:
        raise AuthenticationError(f"Could not decode stored pv.token: {e}") from e

    if not token.strip():
        raise AuthenticationError("Stored pv.token is empty")
    return token.strip()


class TokenAuthenticator:
    """
    Supplies the bearer credential for API calls.

    The interactive portal login runs in a browser outside this service and
    hands over either the raw token or the pv.token value it stored.
    """

    def __init__(self, token: Optional[str] = None, stored_token: Optional[str] = None):
        """
        Initialize the authenticator.

        Args:
            token: Raw bearer token
            stored_token: pv.token localStorage JSON, used when token is not set
        """
        self.token = token
        self.stored_token = stored_token

    def authenticate(self) -> str:
        """
        Resolve the bearer token.

        Returns:
            Bearer token string

        Raises:
            AuthenticationError: If no credential is configured or it is invalid
        """
        if self.token and self.token.strip():
            token = self.token.strip()
        elif self.stored_token:
            token = decode_stored_token(self.stored_token)
        else:
            raise AuthenticationError(
                "Missing PORTAL_TOKEN or PORTAL_STORED_TOKEN"
            )

        logger.info(f"Using portal token {mask_token(token)}")
        return token
