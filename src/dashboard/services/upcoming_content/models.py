"""Models for upcoming content announcements."""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    """Kind of title being announced."""
    MOVIE = "movie"
    SERIES = "series"


class RatingType(str, Enum):
    """Audience rating shown on the announcement card."""
    G = "G"
    PG = "PG"
    PG_13 = "PG-13"
    R = "R"
    NC_17 = "NC-17"
    TV_Y = "TV-Y"
    TV_G = "TV-G"
    TV_PG = "TV-PG"
    TV_14 = "TV-14"
    TV_MA = "TV-MA"


def _clean_names(values: Optional[List[str]]) -> List[str]:
    """Strip names and drop blanks, keeping the caller's order."""
    if not values:
        return []
    return [v.strip() for v in values if v and v.strip()]


def _unique_tags(values: Optional[List[str]]) -> List[str]:
    """Genres behave like a set: first occurrence wins."""
    seen = set()
    tags = []
    for tag in _clean_names(values):
        if tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


class OrderSlot(BaseModel):
    """The (id, content_order) pair the ordering logic works on."""
    model_config = ConfigDict(frozen=True)

    id: str
    content_order: int

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Store ids may come back as ints or UUIDs."""
        return str(v)


class UpcomingContent(BaseModel):
    """A stored upcoming content record (one row of the upcoming_content table)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content_type: ContentType
    genres: List[str] = Field(default_factory=list, alias='genre')
    release_date: date
    content_order: int
    rating_type: Optional[RatingType] = None
    directors: List[str] = Field(default_factory=list)
    writers: List[str] = Field(default_factory=list)
    cast: List[str] = Field(default_factory=list, alias='cast_members')
    description: str = ""
    thumbnail_url: str = ""
    trailer_url: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator('genres', 'directors', 'writers', 'cast', mode='before')
    @classmethod
    def none_to_list(cls, v: Any) -> List[str]:
        """Nullable array columns come back as None."""
        return v or []

    @field_validator('description', 'thumbnail_url', 'trailer_url', mode='before')
    @classmethod
    def none_to_text(cls, v: Any) -> str:
        return v or ""

    @property
    def slot(self) -> OrderSlot:
        return OrderSlot(id=self.id, content_order=self.content_order)


class UpcomingContentData(BaseModel):
    """Field set supplied by the caller for create and update.

    ``content_order`` is kept as entered (forms hand it over as text) and is
    parsed by the registry, so a bad value is reported like any other
    operation failure.
    """
    title: str
    content_type: ContentType
    release_date: date
    content_order: Union[str, int]
    genres: List[str] = Field(default_factory=list)
    rating_type: Optional[RatingType] = None
    directors: List[str] = Field(default_factory=list)
    writers: List[str] = Field(default_factory=list)
    cast: List[str] = Field(default_factory=list)
    description: str = ""
    thumbnail_url: str = ""
    trailer_url: str = ""

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles are required and trimmed."""
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator('rating_type', mode='before')
    @classmethod
    def empty_rating(cls, v: Any) -> Any:
        """Convert empty string to None for the optional rating."""
        if v == "":
            return None
        return v

    @field_validator('genres', mode='before')
    @classmethod
    def validate_genres(cls, v: Optional[List[str]]) -> List[str]:
        return _unique_tags(v)

    @field_validator('directors', 'writers', 'cast', mode='before')
    @classmethod
    def validate_names(cls, v: Optional[List[str]]) -> List[str]:
        return _clean_names(v)

    def to_row(self, content_order: int) -> Dict[str, Any]:
        """Convert to the column layout of the upcoming_content table."""
        return {
            'title': self.title,
            'content_type': self.content_type.value,
            'genre': list(self.genres),
            'release_date': self.release_date.isoformat(),
            'content_order': content_order,
            'rating_type': self.rating_type.value if self.rating_type else None,
            'directors': list(self.directors),
            'writers': list(self.writers),
            'cast_members': list(self.cast),
            'description': self.description,
            'thumbnail_url': self.thumbnail_url,
            'trailer_url': self.trailer_url,
        }

    @classmethod
    def from_record(cls, record: UpcomingContent) -> 'UpcomingContentData':
        """Build an editable field set from a stored record."""
        return cls(
            title=record.title,
            content_type=record.content_type,
            release_date=record.release_date,
            content_order=str(record.content_order),
            genres=record.genres,
            rating_type=record.rating_type,
            directors=record.directors,
            writers=record.writers,
            cast=record.cast,
            description=record.description,
            thumbnail_url=record.thumbnail_url,
            trailer_url=record.trailer_url,
        )
