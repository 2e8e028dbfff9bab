from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import require_admin
from core.utils.response import Response
from schemas.user import UserCreate, UserUpdate, UserResponse
from services.user import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users = await UserService(db).list_users()
    return Response.collection("users", [UserResponse.model_validate(u) for u in users])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await UserService(db).create_user(user_data)
    return Response.success(
        data=UserResponse.model_validate(user),
        message="User created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await UserService(db).get_user(user_id)
    return Response.success(data=UserResponse.model_validate(user))


@router.patch("/{user_id}")
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Change name, email, password, role or ban status."""
    user = await UserService(db).update_user(user_id, user_data, actor=admin)
    return Response.success(data=UserResponse.model_validate(user), message="User updated successfully")


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await UserService(db).delete_user(user_id, actor=admin)
    return Response.success(message="User deleted successfully")
