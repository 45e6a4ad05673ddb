import uuid
from typing import Optional

from pulse.utils.exceptions import UnauthorizedError


def require_identity(user_id: Optional[uuid.UUID]) -> uuid.UUID:
    """Fail fast when an operation that needs a caller gets none"""
    if user_id is None:
        raise UnauthorizedError("Authentication required")
    return user_id
