"""
Caller identity from the Authorization header.

Bearer tokens are looked up by their SHA-256 digest in the api_tokens table.
"""
from typing import Optional

from thoughtlog.core.exceptions import AuthError
from thoughtlog.core.logging_config import get_logger
from thoughtlog.database.init_db import hash_token
from thoughtlog.database.store import API_TOKENS, RecordStore

logger = get_logger(__name__)


def resolve_user_id(authorization: Optional[str], store: RecordStore) -> str:
    """
    Resolve the user id for an Authorization header value.

    Accepts "Bearer <token>" or a bare token.

    Raises:
        AuthError: Header missing, empty, or token unknown
    """
    if not authorization or not authorization.strip():
        raise AuthError("No authorization header")

    token = authorization.strip()
    scheme, _, credentials = token.partition(" ")
    if scheme.lower() == "bearer":
        token = credentials.strip()
    if not token:
        raise AuthError("No authorization header")

    row = store.find_one(API_TOKENS, {"token_hash": hash_token(token)})
    if row is None:
        logger.warning("Rejected request with unknown API token")
        raise AuthError("Not authenticated")

    return row["user_id"]
