from sqlalchemy import Column, String, Text, JSON

from core.database import BaseModel, CHAR_LENGTH


class AcademySettings(BaseModel):
    """Single-row table holding the public academy profile"""
    __tablename__ = "academy_settings"
    __table_args__ = {'extend_existing': True}

    name = Column(String(CHAR_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    email = Column(String(CHAR_LENGTH), nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    whatsapp = Column(String(50), nullable=False, default="")
    hours = Column(JSON, nullable=False, default=dict)
    colors = Column(JSON, nullable=False, default=dict)
    notifications = Column(JSON, nullable=False, default=dict)
    features = Column(JSON, nullable=False, default=dict)
    metrics = Column(JSON, nullable=False, default=dict)
    logo = Column(String(500), nullable=True)
    about = Column(Text, nullable=True)
    hero_title = Column(String(CHAR_LENGTH), nullable=True)
    hero_subtitle = Column(Text, nullable=True)
    hero_image = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<AcademySettings(name='{self.name}')>"
