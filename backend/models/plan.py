from sqlalchemy import Column, String, Boolean, Float, Text, Integer, JSON
from core.database import BaseModel, CHAR_LENGTH


class PlanStatus:
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    ALL = (ACTIVE, INACTIVE)


class Plan(BaseModel):
    __tablename__ = "plans"

    name = Column(String(CHAR_LENGTH), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=False, default="")
    features = Column(JSON, nullable=False, default=list)  # list of strings
    active_members = Column(Integer, nullable=False, default=0)
    monthly_revenue = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=PlanStatus.ACTIVE)
    popular = Column(Boolean, nullable=False, default=False)
