from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel


class ShowtimeModel(Base):
    __tablename__ = 'showtime'
    __table_args__ = (
        # Range scan for the hall exclusivity check
        Index('ix_showtime_hall_id_time', 'hall_id', 'time'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('movie.id'), nullable=False, index=True
    )
    hall_id: Mapped[int] = mapped_column(Integer, ForeignKey('hall.id'), nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    movie: Mapped[MovieModel] = relationship(MovieModel, back_populates='showtimes')
    hall: Mapped[HallModel] = relationship(HallModel)
