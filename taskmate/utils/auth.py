from datetime import datetime, timedelta, UTC

from fastapi import Response
from jose import jwt, JWTError, ExpiredSignatureError

from taskmate import config
from taskmate.errors import Unauthenticated


def create_token(data: dict):
    data = data.copy()
    # read expiry at call-time so tests (and runtime overrides) that modify
    # taskmate.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    expire = datetime.now(UTC) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    data.update({"exp": int(expire.timestamp())})  # JWT spec uses Unix timestamp
    return jwt.encode(data, config.SECRET_KEY, algorithm=config.ALGORITHM)


def create_session_token(email: str) -> str:
    return create_token({"sub": email})


def decode_token(token: str) -> str:
    """Verify ``token`` and return the email it was issued for.

    Raises Unauthenticated when the signature, expiry or subject is bad.
    """
    try:
        # jwt.decode validates exp automatically
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthenticated("Unauthorized access", details="Token has expired")
    except JWTError:
        raise Unauthenticated("Unauthorized access", details="Invalid token")
    email = payload.get("sub")
    if not email:
        raise Unauthenticated("Unauthorized access", details="Invalid token: missing user")
    return email


def _cookie_policy(same_site_dev: str) -> dict:
    production = config.is_production()
    return {
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else same_site_dev,
        "path": "/",
    }


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(config.TOKEN_COOKIE_NAME, token, **_cookie_policy("lax"))


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(config.TOKEN_COOKIE_NAME, **_cookie_policy("strict"))
