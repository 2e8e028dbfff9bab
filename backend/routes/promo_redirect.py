from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from services.promotions import resolve_promo_redirect

router = APIRouter(tags=["Promotions"])


@router.get("/promo/{code}")
async def redirect_promo(code: str):
    """
    Send the visitor to the promotion page for a short or unique code.
    Unknown, inactive or expired codes, and any failure, redirect home.
    """
    target = await resolve_promo_redirect(code)
    return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
