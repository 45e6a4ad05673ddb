import uuid
import logging

from fastapi import APIRouter, HTTPException

from pulse.dependencies import DBSessionDep, CurrentUserDep
from pulse.schemas.user import FollowStatusDTO, ProfileResponseDTO
from pulse.services.user.profile_service import ProfileService
from pulse.utils.exceptions import InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/{user_id}', status_code=200, response_model=ProfileResponseDTO)
async def get_profile(
    user_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Public profile with post and follower counts"""
    try:
        profile_service = ProfileService(db)
        return await profile_service.get_profile(user_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting user profile: {e}")
        raise InternalError("Error getting user profile")


@router.post('/{user_id}/follow', status_code=200, response_model=FollowStatusDTO)
async def follow_user(
    user_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        profile_service = ProfileService(db)
        return await profile_service.follow(user_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error following user: {e}")
        raise InternalError("Error following user")


@router.delete('/{user_id}/follow', status_code=200, response_model=FollowStatusDTO)
async def unfollow_user(
    user_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        profile_service = ProfileService(db)
        return await profile_service.unfollow(user_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error unfollowing user: {e}")
        raise InternalError("Error unfollowing user")
