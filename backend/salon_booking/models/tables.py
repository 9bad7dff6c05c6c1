# backend/salon_booking/models/tables.py

from sqlalchemy import Column, Date, DateTime, Index, Integer, String, Time, UniqueConstraint, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        UniqueConstraint('date', 'time', name='uq_bookings_date_time'),
        Index('idx_bookings_date', 'date'),
        Index('idx_bookings_datetime', 'date', 'time'),
    )

    id = Column(Integer, primary_key=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    telefono = Column(String(40), nullable=False)
    email = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Closures(Base):
    __tablename__ = 'closures'
    __table_args__ = (
        Index('idx_closures_date', 'date'),
    )

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True)


class BlockedSlots(Base):
    __tablename__ = 'blocked_slots'
    __table_args__ = (
        UniqueConstraint('date', 'time', name='uq_blocked_slots_date_time'),
        Index('idx_blocked_slots_date', 'date'),
    )

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
