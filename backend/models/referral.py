from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from core.database import BaseModel, CHAR_LENGTH, GUID


class Referral(BaseModel):
    __tablename__ = "referrals"

    referrer_id = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    referrer_name = Column(String(CHAR_LENGTH), nullable=False)
    referrer_email = Column(String(CHAR_LENGTH), nullable=True)
    referred_name = Column(String(CHAR_LENGTH), nullable=False)
    referred_phone = Column(String(20), nullable=False)  # digits only
    referred_email = Column(String(CHAR_LENGTH), nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")

    referrer = relationship("User", back_populates="referrals", lazy="raise")
