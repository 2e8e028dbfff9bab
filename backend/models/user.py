from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from core.database import BaseModel, CHAR_LENGTH


class UserRole:
    ADMIN = "ADMIN"
    USER = "USER"

    ALL = (ADMIN, USER)


class UserStatus:
    ACTIVE = "ACTIVE"
    BANNED = "BANNED"

    ALL = (ACTIVE, BANNED)


class User(BaseModel):
    __tablename__ = "users"
    __table_args__ = {'extend_existing': True}

    name = Column(String(CHAR_LENGTH), nullable=False)
    email = Column(String(CHAR_LENGTH), unique=True,
                   index=True, nullable=False)
    hashed_password = Column(String(CHAR_LENGTH), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.USER)  # USER, ADMIN
    status = Column(String(20), nullable=False, default=UserStatus.ACTIVE)  # ACTIVE, BANNED
    image = Column(String(500), nullable=True)

    referrals = relationship("Referral", back_populates="referrer", lazy="raise", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_banned(self) -> bool:
        return self.status == UserStatus.BANNED
