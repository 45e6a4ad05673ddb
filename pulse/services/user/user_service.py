from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models import User
from pulse.repositories.user_repository import UserRepository
from pulse.schemas.user import UserLogInDTO, UserSignUpDTO
from pulse.utils.exceptions import InternalError, UnauthorizedError, ValidationFailedError
from pulse.utils.token.auth.token_util import generate_token


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def create_user(self, user_data: UserSignUpDTO) -> User:
        existing_user = await self.user_repository.find_one_or_none(
            email=user_data.email
        )
        if existing_user:
            raise ValidationFailedError("Email already in use!", field="email")

        new_user = User.create_user(user_data)
        created_user = await self.user_repository.insert_one(new_user)
        if not created_user:
            raise InternalError("Error creating user!")
        return created_user

    async def authenticate_user(self, user_data: UserLogInDTO) -> str:
        user = await self.user_repository.find_one_or_none(email=user_data.email)
        if not user or not user.check_password(user_data.password):
            raise UnauthorizedError("Invalid credentials!")

        token_payload = {"user_id": str(user.id)}
        return generate_token(token_payload)

