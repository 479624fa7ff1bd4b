"""User service — registration and password login."""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.password import hash_password, verify_password
from bazaar.db.models import User
from bazaar.db.repository import Repository
from bazaar.errors import NotFound, UniqueConstraintViolation, ValidationError
from bazaar.schemas.auth import RegisterRequest

logger = structlog.get_logger()

_DUPLICATE_MESSAGES = {
    ("username",): "Username already exists!",
    ("email",): "Email already exists!",
    ("phone",): "Phone number already exists!",
}


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = Repository(db, User)

    async def register(self, body: RegisterRequest) -> User:
        try:
            user = await self.users.create(
                username=body.username,
                email=body.email,
                phone=body.phone or None,
                password_hash=hash_password(body.password),
                is_seller=body.is_seller,
                img=body.img,
                country=body.country,
                description=body.description,
            )
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, _DUPLICATE_MESSAGES.get(e.field_group)
            ) from e
        await self.db.commit()
        logger.info("user.registered", user_id=str(user.id), is_seller=user.is_seller)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Username + password → user. Unknown user is 404, bad password 400."""
        user = await self.users.find_unique(username=username)
        if not user:
            raise NotFound("User not found!")
        if not verify_password(password, user.password_hash):
            logger.info("user.login_failed", user_id=str(user.id))
            raise ValidationError("Wrong password or username!")
        logger.info("user.logged_in", user_id=str(user.id))
        return user

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.users.find_unique(id=user_id)
        if not user:
            raise NotFound("User not found")
        return user
