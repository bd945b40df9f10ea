from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, Float, Boolean, Date, Time, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Center(Base):
    __tablename__ = 'center'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    center_type = Column(Text)
    address = Column(Text)
    phone = Column(Text)

    # Centers without coordinates are never recommended
    latitude = Column(Float)
    longitude = Column(Float)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    operating_hours = relationship(
        "CenterOperatingHour", back_populates="center",
        cascade="all, delete-orphan", order_by="CenterOperatingHour.id"
    )
    holidays = relationship(
        "CenterHoliday", back_populates="center",
        cascade="all, delete-orphan", order_by="CenterHoliday.holiday_date"
    )
    staff = relationship(
        "CenterStaff", back_populates="center",
        cascade="all, delete-orphan", order_by="CenterStaff.id"
    )
    programs = relationship(
        "CenterProgram", back_populates="center",
        cascade="all, delete-orphan", order_by="CenterProgram.id"
    )

    __table_args__ = (
        Index('ix_center_active_location', 'is_active', 'latitude', 'longitude'),
    )


class CenterOperatingHour(Base):
    __tablename__ = 'center_operating_hour'

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(Integer, ForeignKey('center.id', ondelete='CASCADE'), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 1=Monday .. 7=Sunday
    open_time = Column(Time)
    close_time = Column(Time)
    is_open = Column(Boolean, nullable=False, default=True)

    center = relationship("Center", back_populates="operating_hours")


class CenterHoliday(Base):
    __tablename__ = 'center_holiday'

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(Integer, ForeignKey('center.id', ondelete='CASCADE'), nullable=False, index=True)

    holiday_date = Column(Date, nullable=False)
    holiday_name = Column(Text)
    is_regular = Column(Boolean, nullable=False, default=True)  # False = temporary closure

    center = relationship("Center", back_populates="holidays")


class CenterStaff(Base):
    __tablename__ = 'center_staff'

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(Integer, ForeignKey('center.id', ondelete='CASCADE'), nullable=False, index=True)

    staff_type = Column(Text, nullable=False)  # free-text certification label
    staff_count = Column(Integer, nullable=False, default=1)

    center = relationship("Center", back_populates="staff")


class CenterProgram(Base):
    __tablename__ = 'center_program'

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(Integer, ForeignKey('center.id', ondelete='CASCADE'), nullable=False, index=True)

    program_name = Column(Text, nullable=False)
    program_type = Column(Text)
    target_group = Column(Text)
    description = Column(Text)
    is_online_available = Column(Boolean, nullable=False, default=False)
    is_free = Column(Boolean, nullable=False, default=True)
    fee_amount = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)

    center = relationship("Center", back_populates="programs")
