from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.database import get_db
from core.dependencies import ensure_admin, get_optional_principal, require_admin
from core.utils.response import Response
from schemas.testimonial import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from services.testimonials import TestimonialService

router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


@router.get("")
async def list_testimonials(
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: Optional[AuthenticatedPrincipal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    include_all = status_filter == "all"
    if include_all:
        ensure_admin(principal)
    testimonials = await TestimonialService(db).list_testimonials(include_all=include_all)
    return Response.collection("testimonials", [TestimonialResponse.model_validate(t) for t in testimonials])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    testimonial_data: TestimonialCreate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = await TestimonialService(db).create_testimonial(testimonial_data)
    return Response.success(
        data=TestimonialResponse.model_validate(testimonial),
        message="Testimonial created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{testimonial_id}")
async def update_testimonial(
    testimonial_id: UUID,
    testimonial_data: TestimonialUpdate,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    testimonial = await TestimonialService(db).update_testimonial(testimonial_id, testimonial_data)
    return Response.success(
        data=TestimonialResponse.model_validate(testimonial),
        message="Testimonial updated successfully",
    )


@router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: UUID,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await TestimonialService(db).delete_testimonial(testimonial_id)
    return Response.success(message="Testimonial deleted successfully")
