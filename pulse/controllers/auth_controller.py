import logging

from fastapi import APIRouter, HTTPException, status

from pulse.dependencies import DBSessionDep
from pulse.schemas.user import TokenResponseDTO, UserLogInDTO, UserSignUpDTO
from pulse.services.user.user_service import UserService
from pulse.utils.exceptions import InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(request: UserSignUpDTO, session: DBSessionDep) -> dict:
    """Register a new user"""
    try:
        user_service = UserService(session=session)
        user = await user_service.create_user(user_data=request)
        return {"detail": "User created successfully!", "id": str(user.id)}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during signup: {e}")
        raise InternalError("Error during signup")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=TokenResponseDTO)
async def login(request: UserLogInDTO, session: DBSessionDep):
    """Authenticate user and return JWT token"""
    try:
        user_service = UserService(session=session)
        token = await user_service.authenticate_user(user_data=request)
        return TokenResponseDTO(token=token)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {e}")
        raise InternalError("Error during login")
