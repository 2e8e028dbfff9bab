from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.exceptions import ConflictException, NotFoundException, ValidationException
from core.utils.encryption import PasswordManager
from core.utils.logging import structured_logger
from models.user import User, UserStatus
from schemas.user import UserCreate, UserUpdate


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _email_taken(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def _commit(self, user: User) -> User:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException(message="Email already registered")
        await self.db.refresh(user)
        return user

    async def list_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalars().first()
        if not user:
            raise NotFoundException(message="User not found")
        return user

    async def create_user(self, data: UserCreate) -> User:
        email = data.email.lower()
        if await self._email_taken(email):
            raise ConflictException(message="Email already registered")
        user = User(
            name=data.name,
            email=email,
            hashed_password=PasswordManager.hash_password(data.password),
            role=data.role,
            status=data.status,
        )
        self.db.add(user)
        return await self._commit(user)

    async def update_user(self, user_id: UUID, data: UserUpdate, actor: AuthenticatedPrincipal) -> User:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationException(message="No fields to update")

        user = await self.get_user(user_id)
        if user.id == actor.user_id and changes.get("status") == UserStatus.BANNED:
            raise ValidationException(message="You cannot ban your own account")
        if user.id == actor.user_id and changes.get("role", user.role) != user.role:
            raise ValidationException(message="You cannot change your own role")

        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if await self._email_taken(changes["email"], exclude_id=user.id):
                raise ConflictException(message="Email already registered")
        if "password" in changes:
            user.hashed_password = PasswordManager.hash_password(changes.pop("password"))

        for key, value in changes.items():
            setattr(user, key, value)

        user = await self._commit(user)
        structured_logger.info(
            message="User updated",
            user_id=str(actor.user_id),
            metadata={"target_user_id": str(user.id), "fields": sorted(data.model_fields_set)},
        )
        return user

    async def delete_user(self, user_id: UUID, actor: AuthenticatedPrincipal) -> None:
        if user_id == actor.user_id:
            raise ValidationException(message="You cannot delete your own account")
        user = await self.get_user(user_id)
        await self.db.delete(user)
        await self.db.commit()
        structured_logger.info(
            message="User deleted",
            user_id=str(actor.user_id),
            metadata={"target_user_id": str(user_id)},
        )
