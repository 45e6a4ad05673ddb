import uuid
import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Response, status, HTTPException

from pulse.dependencies import DBSessionDep, CurrentUserDep
from pulse.schemas.comment import CommentCreateDTO, CommentResponseDTO
from pulse.schemas.post import PostCreateDTO, PostResponseDTO, LikeResponseDTO
from pulse.services.post.interaction_service import InteractionService
from pulse.services.post.post_service import PostService
from pulse.utils.exceptions import InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('', status_code=200, response_model=List[PostResponseDTO])
async def get_posts(
    db: DBSessionDep,
    current_user: CurrentUserDep,
    user_id: Optional[uuid.UUID] = Query(None, description="Only posts of this author"),
):
    """Get posts, newest first"""
    try:
        post_service = PostService(db)
        return await post_service.get_posts(current_user.id, author_id=user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting posts: {e}")
        raise InternalError("Error getting posts")


@router.post('', status_code=status.HTTP_201_CREATED, response_model=PostResponseDTO)
async def create_post(
    post_data: PostCreateDTO,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Create a text post with an optional image URL"""
    try:
        post_service = PostService(db)
        return await post_service.create_post(post_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        raise InternalError("Error creating post")


@router.get('/{post_id}', status_code=200, response_model=PostResponseDTO)
async def get_post(post_id: uuid.UUID, db: DBSessionDep, current_user: CurrentUserDep):
    """Get post by ID"""
    try:
        post_service = PostService(db)
        return await post_service.get_post_by_id(post_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting post: {e}")
        raise InternalError("Error getting post")


@router.delete('/{post_id}', status_code=200)
async def delete_post(
    post_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
) -> dict:
    """Delete post by ID, owner only"""
    try:
        post_service = PostService(db)
        await post_service.delete_post(post_id, current_user.id)
        return {"detail": "Post deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting post: {e}")
        raise InternalError("Error deleting post")


@router.post('/{post_id}/like', status_code=200, response_model=LikeResponseDTO)
async def toggle_like(
    post_id: uuid.UUID,
    response: Response,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Toggle like on a post (like if not liked, unlike if liked)"""
    try:
        interaction_service = InteractionService(db)
        result = await interaction_service.toggle_like(post_id, current_user.id)
        if result.liked:
            response.status_code = status.HTTP_201_CREATED
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling like: {e}")
        raise InternalError("Error toggling like")


@router.get('/{post_id}/comments', status_code=200, response_model=List[CommentResponseDTO])
async def get_comments(
    post_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Comments of a post, oldest first"""
    try:
        interaction_service = InteractionService(db)
        return await interaction_service.get_comments(post_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting comments: {e}")
        raise InternalError("Error getting comments")


@router.post('/{post_id}/comments', status_code=status.HTTP_201_CREATED, response_model=CommentResponseDTO)
async def add_comment(
    post_id: uuid.UUID,
    comment_data: CommentCreateDTO,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        interaction_service = InteractionService(db)
        return await interaction_service.add_comment(post_id, comment_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding comment: {e}")
        raise InternalError("Error adding comment")
