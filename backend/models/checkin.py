from sqlalchemy import Column, String, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from core.database import BaseModel, CHAR_LENGTH, GUID


class CheckinCode(BaseModel):
    __tablename__ = "checkin_codes"

    code = Column(String(32), unique=True, nullable=False, index=True)
    valid_date = Column(Date, nullable=False, unique=True, index=True)  # one code per gym day

    check_ins = relationship("CheckIn", back_populates="checkin_code", lazy="raise", passive_deletes=True)


class CheckIn(BaseModel):
    __tablename__ = "check_ins"

    name = Column(String(CHAR_LENGTH), nullable=False)
    phone = Column(String(20), nullable=False)  # digits only
    check_in_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="ACTIVE")
    code_id = Column(GUID(), ForeignKey("checkin_codes.id", ondelete="SET NULL"), nullable=True)

    checkin_code = relationship("CheckinCode", back_populates="check_ins", lazy="raise")
