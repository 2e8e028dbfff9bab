# Services package - Consolidated imports only

# Public site
from .homev2 import calculate_annual_savings, current_gym_status
from .promotions import PromotionService, PromoRedirector, resolve_promo_redirect
from .plans import PlanService
from .partners import PartnerService
from .ads import AdService
from .testimonials import TestimonialService
from .settings import SettingsService

# Members and leads
from .auth import AuthService
from .user import UserService
from .appointments import AppointmentService
from .referrals import ReferralService
from .checkin import CheckinService

# Back office
from .knowledge import KnowledgeService
from .qrcode import QRCodeService

__all__ = [
    # Public site
    "calculate_annual_savings",
    "current_gym_status",
    "PromotionService",
    "PromoRedirector",
    "resolve_promo_redirect",
    "PlanService",
    "PartnerService",
    "AdService",
    "TestimonialService",
    "SettingsService",

    # Members and leads
    "AuthService",
    "UserService",
    "AppointmentService",
    "ReferralService",
    "CheckinService",

    # Back office
    "KnowledgeService",
    "QRCodeService",
]
