from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


movie_genre_table = Table(
    'movie_genre',
    Base.metadata,
    Column('movie_id', Integer, ForeignKey('movie.id', ondelete='CASCADE'), primary_key=True),
    Column('genre_id', Integer, ForeignKey('genre.id', ondelete='CASCADE'), primary_key=True),
)


class GenreModel(Base):
    __tablename__ = 'genre'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    runtime: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    release_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    genres: Mapped[List[GenreModel]] = relationship(
        GenreModel, secondary=movie_genre_table, lazy='selectin', order_by=GenreModel.name
    )
    showtimes: Mapped[List['ShowtimeModel']] = relationship(
        'ShowtimeModel', back_populates='movie', viewonly=True
    )
