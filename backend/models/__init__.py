# Models package - importing registers every table on Base.metadata
from .user import User, UserRole, UserStatus
from .promotion import Promotion
from .plan import Plan, PlanStatus
from .partner import Partner
from .ad import Ad
from .testimonial import Testimonial
from .knowledge import KnowledgeEntry
from .appointment import Appointment, AppointmentStatus
from .checkin import CheckinCode, CheckIn
from .referral import Referral
from .settings import AcademySettings

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "Promotion",
    "Plan",
    "PlanStatus",
    "Partner",
    "Ad",
    "Testimonial",
    "KnowledgeEntry",
    "Appointment",
    "AppointmentStatus",
    "CheckinCode",
    "CheckIn",
    "Referral",
    "AcademySettings",
]
