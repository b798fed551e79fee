from datetime import date
from typing import List, Optional

import attrs


@attrs.define(frozen=True)
class Genre:
    id: int
    name: str


@attrs.define
class Movie:
    id: int
    title: str
    runtime: Optional[int] = None  # minutes
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    genres: List[Genre] = attrs.field(factory=list)
