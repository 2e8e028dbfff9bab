from sqlalchemy import Column, String, Boolean, Text, Integer, CheckConstraint
from core.database import BaseModel, CHAR_LENGTH


class Testimonial(BaseModel):
    __tablename__ = "testimonials"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_testimonials_rating"),
    )

    name = Column(String(CHAR_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, default=5)
    image = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
