from sqlalchemy import Column, String, Boolean, Text
from core.database import BaseModel, CHAR_LENGTH


class Partner(BaseModel):
    __tablename__ = "partners"

    name = Column(String(CHAR_LENGTH), nullable=False)
    description = Column(Text, nullable=False)
    logo = Column(String(500), nullable=True)
    link = Column(String(500), nullable=True)
    category = Column(String(100), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
