from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer
from core.database import BaseModel, CHAR_LENGTH


class Promotion(BaseModel):
    __tablename__ = "promotions"

    title = Column(String(CHAR_LENGTH), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(500), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    unique_code = Column(String(32), unique=True, nullable=True, index=True)
    short_code = Column(String(16), unique=True, nullable=True, index=True)
    # Only ever incremented in place by the promo redirector
    access_count = Column(Integer, nullable=False, default=0)
