from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import get_current_principal
from core.utils.response import Response
from schemas.auth import RegisterRequest, LoginRequest, PrincipalResponse
from services.auth import AuthService, clear_session_cookie, principal_for, set_session_cookie

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _principal_payload(principal: AuthenticatedPrincipal) -> PrincipalResponse:
    return PrincipalResponse(
        id=principal.user_id,
        email=principal.email,
        name=principal.name,
        role=principal.role,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new member and start a session."""
    user = await AuthService(db).register(data)
    response = Response.success(
        data=_principal_payload(principal_for(user)),
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )
    set_session_cookie(response, user)
    return response


@router.post("/login")
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Check credentials and set the session cookie."""
    user = await AuthService(db).authenticate(data)
    response = Response.success(
        data=_principal_payload(principal_for(user)),
        message="Login successful",
    )
    set_session_cookie(response, user)
    return response


@router.post("/logout")
async def logout():
    response = Response.success(message="Logged out successfully")
    clear_session_cookie(response)
    return response


@router.get("/me")
async def me(principal: AuthenticatedPrincipal = Depends(get_current_principal)):
    return Response.success(data=_principal_payload(principal))


@router.post("/init")
async def init_admin(db: AsyncSession = Depends(get_db)):
    """Create the default administrator if there is no admin and its email is free."""
    admin = await AuthService(db).ensure_default_admin()
    if admin is None:
        return Response.success(data={"created": False}, message="Default admin not created")
    return Response.success(
        data={"created": True, "email": admin.email},
        message="Admin user created successfully",
    )
