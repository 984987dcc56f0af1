"""FastAPI dependency utilities."""

import logging
import re
from typing import Any

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer

from app.infrastructure.security import decode_access_token

# Tokens are issued by the authentication service; this API only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

RECIPIENT_COOKIE = "userId"
_NUMERIC_ID = re.compile(r"^[0-9]+$")

logger = logging.getLogger(__name__)


def parse_recipient_id(raw: object) -> int | None:
    """Return ``raw`` as a positive integer id or ``None`` when invalid."""

    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not _NUMERIC_ID.match(text):
        return None
    value = int(text)
    return value if value > 0 else None


def get_token_claims(token: str = Depends(oauth2_scheme)) -> dict[str, Any]:
    """Return the verified claims of the bearer token."""

    try:
        return decode_access_token(token)
    except ValueError as exc:
        logger.warning("Rejected access token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def is_admin_claims(claims: dict[str, Any]) -> bool:
    return claims.get("is_admin") is True or claims.get("role") == "admin"


def require_admin(claims: dict[str, Any] = Depends(get_token_claims)) -> dict[str, Any]:
    """Ensure the caller holds an administrator token."""

    if not is_admin_claims(claims):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return claims


def get_recipient_id(
    request: Request,
    recipient_id: str | None = Query(
        default=None,
        description="Recipient whose notifications are accessed; defaults to the caller",
    ),
    claims: dict[str, Any] = Depends(get_token_claims),
) -> int | None:
    """Resolve the recipient a request acts on.

    Looks at the ``recipient_id`` query parameter, then the ``userId`` cookie,
    then the token subject. Invalid values resolve to ``None``. Only
    administrators may act on a recipient other than themselves.
    """

    token_recipient = parse_recipient_id(claims.get("sub"))
    raw = recipient_id if recipient_id is not None else request.cookies.get(RECIPIENT_COOKIE)
    if raw is None:
        return token_recipient

    requested = parse_recipient_id(raw)
    if (
        requested is not None
        and requested != token_recipient
        and not is_admin_claims(claims)
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot access another user's notifications",
        )
    return requested
