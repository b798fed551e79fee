"""
Catalog provisioning (halls with seats, genres, movies)

Used by the seed script and tests; the reservation engine only reads these rows.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Genre, Movie


class ICatalogCommandRepo(ABC):
    @abstractmethod
    async def create_hall(self, *, name: str, rows: int, seats_per_row: int) -> Hall:
        pass

    @abstractmethod
    async def create_genre(self, *, name: str) -> Genre:
        pass

    @abstractmethod
    async def create_movie(
        self,
        *,
        title: str,
        runtime: Optional[int] = None,
        release_date: Optional[date] = None,
        poster_url: Optional[str] = None,
        genre_ids: Optional[List[int]] = None,
    ) -> Movie:
        pass
