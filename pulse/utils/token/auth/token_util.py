from datetime import UTC, datetime, timedelta

import jwt

from pulse.config import settings
from pulse.utils.exceptions import UnauthorizedError


def generate_token(payload: dict) -> str:
    payload = dict(payload)
    payload["exp"] = datetime.now(UTC) + timedelta(seconds=settings.JWT_EXPIRATION)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


def verify_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired!")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token!")
