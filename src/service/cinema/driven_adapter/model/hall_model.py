from typing import List

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


class HallModel(Base):
    __tablename__ = 'hall'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    seats: Mapped[List['SeatModel']] = relationship(
        'SeatModel',
        back_populates='hall',
        lazy='selectin',
        order_by=lambda: (SeatModel.row, SeatModel.number),
    )


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (UniqueConstraint('hall_id', 'row', 'number'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hall_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('hall.id', ondelete='CASCADE'), nullable=False, index=True
    )
    row: Mapped[int] = mapped_column(Integer, nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)

    hall: Mapped[HallModel] = relationship(HallModel, back_populates='seats')
