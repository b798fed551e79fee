from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base
from src.service.cinema.driven_adapter.model.hall_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


booking_seat_table = Table(
    'booking_seat',
    Base.metadata,
    Column('booking_id', Integer, ForeignKey('booking.id', ondelete='CASCADE'), primary_key=True),
    Column('seat_id', Integer, ForeignKey('seat.id'), primary_key=True),
    Index('ix_booking_seat_seat_id', 'seat_id'),
)


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        Index('ix_booking_showtime_id_status', 'showtime_id', 'status'),
        Index('ix_booking_user_id_created_at', 'user_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    showtime_id: Mapped[int] = mapped_column(Integer, ForeignKey('showtime.id'), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='CONFIRMED', nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    seats: Mapped[List[SeatModel]] = relationship(
        SeatModel,
        secondary=booking_seat_table,
        lazy='selectin',
        order_by=(SeatModel.row, SeatModel.number),
    )
    showtime: Mapped[ShowtimeModel] = relationship(ShowtimeModel)
