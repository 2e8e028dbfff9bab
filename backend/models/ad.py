from sqlalchemy import Column, String, Boolean, DateTime
from core.database import BaseModel, CHAR_LENGTH


class Ad(BaseModel):
    __tablename__ = "ads"

    title = Column(String(CHAR_LENGTH), nullable=False)
    image = Column(String(500), nullable=True)
    link = Column(String(500), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
