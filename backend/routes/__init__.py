# Consolidated route imports
from .ads import router as ads_router
from .appointments import router as appointments_router
from .auth import router as auth_router
from .checkin import router as checkin_router, qr_router
from .health import router as health_router
from .homev2 import router as homev2_router
from .knowledge import router as knowledge_router
from .partners import router as partners_router
from .plans import router as plans_router
from .promo_redirect import router as promo_redirect_router
from .promotions import router as promotions_router
from .referrals import router as referrals_router
from .settings import router as settings_router
from .testimonials import router as testimonials_router
from .user import router as user_router

# Export all routers for easy importing
__all__ = [
    "ads_router",
    "appointments_router",
    "auth_router",
    "checkin_router",
    "qr_router",
    "health_router",
    "homev2_router",
    "knowledge_router",
    "partners_router",
    "plans_router",
    "promo_redirect_router",
    "promotions_router",
    "referrals_router",
    "settings_router",
    "testimonials_router",
    "user_router",
]
