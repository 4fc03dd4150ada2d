"""Bearer token authentication shared by the REST API and the socket gateway."""

from core.auth.bearer import (
    BearerTokenAuthentication,
    TokenUser,
    decode_access_token,
    extract_bearer_token,
)

__all__ = [
    "BearerTokenAuthentication",
    "TokenUser",
    "decode_access_token",
    "extract_bearer_token",
]
