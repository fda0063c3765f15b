"""
User endpoints - minimal owner management so listings have someone to belong to.
"""

from typing import Annotated

from fastapi import APIRouter, Path, status

from listings_api.core.errors import Conflict, NotFound
from listings_api.db.models.user import User
from listings_api.db.repositories.user_repository import UserRepository
from listings_api.db.session import DbSession
from listings_api.resources.validation import INTEGER_MAX
from listings_api.schemas.user import UserCreate, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(session: DbSession, data: UserCreate):
    """Create a user. Email must be unique."""
    repo = UserRepository(session)
    if await repo.get_by_email(data.email):
        raise Conflict("Email already registered")
    user = await repo.add(User(email=data.email, full_name=data.full_name))
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(session: DbSession, user_id: Annotated[int, Path(ge=1, le=INTEGER_MAX)]):
    """Get a single user; listing owners are rendered as links to this route."""
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise NotFound("User", user_id)
    return UserResponse.model_validate(user)
