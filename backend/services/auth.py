from typing import Optional

from fastapi import Response as FastAPIResponse
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.config import settings
from core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
)
from core.utils.auth.jwt_auth import JWTManager
from core.utils.encryption import PasswordManager
from core.utils.logging import structured_logger
from models.user import User, UserRole, UserStatus
from schemas.auth import RegisterRequest, LoginRequest


def principal_for(user: User) -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(
        user_id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
    )


def set_session_cookie(response: FastAPIResponse, user: User) -> None:
    token = JWTManager().create_session_token(principal_for(user).to_claims())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
        path="/",
    )


def clear_session_cookie(response: FastAPIResponse) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalars().first()

    async def register(self, data: RegisterRequest) -> User:
        email = data.email.lower()
        if await self.get_user_by_email(email):
            raise ConflictException(message="Email already registered")

        user = User(
            name=data.name,
            email=email,
            hashed_password=PasswordManager.hash_password(data.password),
            role=UserRole.USER,
            status=UserStatus.ACTIVE,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException(message="Email already registered")
        await self.db.refresh(user)

        structured_logger.info(
            message="User registered",
            user_id=str(user.id),
            metadata={"email": email},
        )
        return user

    async def authenticate(self, data: LoginRequest) -> User:
        user = await self.get_user_by_email(data.email)
        valid, new_hash = PasswordManager.verify_and_upgrade(
            data.password, user.hashed_password if user else None
        )
        if not valid:
            structured_logger.warning(
                message="Failed login attempt",
                metadata={"email": data.email.lower()},
            )
            raise AuthenticationException(message="Invalid email or password")
        if user.is_banned:
            raise AuthorizationException(message="Account is banned")

        if new_hash:
            user.hashed_password = new_hash
            await self.db.commit()
            await self.db.refresh(user)

        structured_logger.info(message="User logged in", user_id=str(user.id))
        return user

    async def ensure_default_admin(self) -> Optional[User]:
        """Create the configured administrator when no admin exists yet.

        Returns the new admin, or None when an admin is already present or
        the configured email belongs to another account. Existing accounts
        are never promoted.
        """
        result = await self.db.execute(select(User.id).where(User.role == UserRole.ADMIN).limit(1))
        if result.first() is not None:
            return None

        email = settings.DEFAULT_ADMIN_EMAIL.strip().lower()
        if await self.get_user_by_email(email):
            structured_logger.warning(
                message="Default admin email already belongs to a non-admin account",
                metadata={"email": email},
            )
            return None

        admin = User(
            name=settings.DEFAULT_ADMIN_NAME,
            email=email,
            hashed_password=PasswordManager.hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            status=UserStatus.ACTIVE,
        )
        self.db.add(admin)

        await self.db.commit()
        await self.db.refresh(admin)
        structured_logger.info(
            message="Default admin ensured",
            user_id=str(admin.id),
            metadata={"email": email},
        )
        return admin
