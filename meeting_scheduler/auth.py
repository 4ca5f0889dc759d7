# auth.py
"""
Identifiers and review-link tokens.

Anyone holding a review token can approve or deny the request it belongs to,
so tokens carry 256 bits from the OS CSPRNG and are never derived from ids.
"""
import secrets
import uuid
from typing import Optional

from fastapi import Form, HTTPException, Query, status

TOKEN_BYTES = 32


def generate_id() -> str:
    return uuid.uuid4().hex


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def _require(token: Optional[str]) -> str:
    if not token or not token.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing token")
    return token.strip()


# Used for review links opened from the notification email
def token_from_query(token: Optional[str] = Query(None)) -> str:
    return _require(token)


# Used for the approve/deny forms on the review page
def token_from_form(token: Optional[str] = Form(None)) -> str:
    return _require(token)
