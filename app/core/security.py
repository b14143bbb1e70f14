"""Access-token verification. Tokens are issued by the hosted auth provider."""

import uuid

import jwt

from app.core.config import get_settings


class InvalidTokenError(Exception):
    """Token is missing, expired, badly signed or carries no usable subject."""


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    if not settings.auth_jwt_secret:
        raise InvalidTokenError("Auth secret is not configured")
    try:
        return jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Invalid token") from e


def user_id_from_token(token: str) -> uuid.UUID:
    """Return the user id (``sub`` claim) of a verified access token."""
    claims = decode_access_token(token)
    try:
        return uuid.UUID(str(claims["sub"]))
    except (KeyError, ValueError) as e:
        raise InvalidTokenError("Token subject is not a user id") from e
