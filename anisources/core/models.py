"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the records produced by extraction: anime summaries,
episode references, detail records and score histogram buckets, together
with the closed set of source identifiers and the tagged ParseResult
returned across the extraction boundary.
"""

import re
from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from anisources.core.exceptions import UnknownSourceError


class SourceId(str, Enum):
    """Closed set of supported sources."""

    ANIMEWORLD = "AnimeWorld"
    GOGOANIME = "GoGoAnime"
    ANIMEHEAVEN = "AnimeHeaven"
    ANIMEFIRE = "AnimeFire"
    KURAMANIME = "Kuramanime"
    JKANIME = "JKanime"
    ANIME3RB = "Anime3rb"
    HIANIME = "HiAnime"
    ZOROTV = "ZoroTv"
    ANILIBRIA = "Anilibria"
    ANIMESRBIJA = "AnimeSRBIJA"
    ANIWORLD = "AniWorld"
    TOKYOINSIDER = "TokyoInsider"
    ANIVIBE = "AniVibe"
    ANIMEUNITY = "AnimeUnity"
    ANIMEFLV = "AnimeFLV"
    HANASHI = "Hanashi"

    @classmethod
    def parse(cls, value: Union[str, "SourceId"]) -> "SourceId":
        """
        Resolve a stored or user-supplied name to a SourceId.

        Matching is case-insensitive against both the display value
        and the member name. Anything else raises UnknownSourceError.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            needle = value.strip().lower()
            for member in cls:
                if needle in (member.value.lower(), member.name.lower()):
                    return member

        raise UnknownSourceError(value)

    def __str__(self) -> str:
        return self.value


class DocumentKind(str, Enum):
    """Kinds of documents an adapter can extract from."""

    FEATURED = "featured"
    SEARCH = "search"
    EPISODES = "episodes"
    DETAIL = "detail"

    def __str__(self) -> str:
        return self.value


class ResultStatus(str, Enum):
    """Outcome tag of a ParseResult."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class ResultReason(str, Enum):
    """Why a ParseResult is empty or failed."""

    NO_CONTENT = "no_content"
    NO_ITEMS = "no_items"
    SELECTOR_NOT_FOUND = "selector_not_found"
    MALFORMED_MARKUP = "malformed_markup"
    MALFORMED_JSON = "malformed_json"
    UNSUPPORTED = "unsupported"
    EXTRACTION_ERROR = "extraction_error"


RETRYABLE_REASONS = frozenset({
    ResultReason.MALFORMED_MARKUP,
    ResultReason.MALFORMED_JSON,
    ResultReason.EXTRACTION_ERROR,
})


class AnimeSummary(BaseModel):
    """
    One card from a listing or search results page.

    Title is never empty; image URL and href are stored exactly as
    the adapter normalized them so serialization round-trips losslessly.
    """

    title: str = Field(..., min_length=1, description="Anime title")
    image_url: str = Field("", description="Absolute poster URL")
    href: str = Field("", description="Canonical detail-page path or URL")
    source: SourceId = Field(..., description="Source the card was extracted from")
    episode_label: Optional[str] = Field(None, description="Latest episode label, e.g. '12'")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v

    def __str__(self) -> str:
        return f"{self.title} ({self.source})"

    def __repr__(self) -> str:
        return f"AnimeSummary(title='{self.title}', source='{self.source}')"


class EpisodeRef(BaseModel):
    """Reference to a single episode page or stream."""

    number: str = Field(..., description="Episode label as shown by the source")
    href: str = Field(..., min_length=1, description="Episode page or stream URL")
    download_url: str = Field("", description="Direct download URL when the source exposes one")

    @property
    def episode_number(self) -> int:
        """Numeric episode derived from the label, 0 when it has no digits."""
        digits = re.sub(r"\D", "", self.number)
        return int(digits) if digits else 0

    def __str__(self) -> str:
        return f"Episode {self.number}"


class AnimeDetail(BaseModel):
    """Detail page data for one anime."""

    aliases: str = Field("", description="Alternative or original-language title")
    synopsis: str = Field("", description="Cleaned synopsis text")
    airdate: str = Field("", description="Air date as shown by the source")
    rating: str = Field("", description="Rating as shown by the source")
    episodes: List[EpisodeRef] = Field(default_factory=list, description="Episodes listed on the page")

    @property
    def is_empty(self) -> bool:
        """True when the page yielded no useful information."""
        return not (self.aliases or self.synopsis or self.episodes)


class ScoreBucket(BaseModel):
    """One bar of a score distribution histogram."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., description="Score value of this bucket")
    amount: int = Field(..., ge=0, description="Number of votes with this score")


T = TypeVar("T")


class ParseResult(BaseModel, Generic[T]):
    """
    Tagged outcome of one extraction call.

    Lets callers distinguish "the page had nothing" from "the page
    could not be processed" without inspecting exceptions.
    """

    status: ResultStatus
    value: Optional[T] = None
    reason: Optional[ResultReason] = None
    message: str = ""

    @classmethod
    def ok(cls, value: T) -> "ParseResult[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def empty(cls, reason: ResultReason = ResultReason.NO_ITEMS, message: str = "") -> "ParseResult[T]":
        return cls(status=ResultStatus.EMPTY, reason=reason, message=message)

    @classmethod
    def failed(cls, reason: ResultReason, message: str = "") -> "ParseResult[T]":
        return cls(status=ResultStatus.FAILED, reason=reason, message=message)

    @property
    def is_ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_empty(self) -> bool:
        return self.status == ResultStatus.EMPTY

    @property
    def is_failed(self) -> bool:
        return self.status == ResultStatus.FAILED

    @property
    def retryable(self) -> bool:
        """Whether fetching the document again might produce a different outcome."""
        return self.is_failed and self.reason in RETRYABLE_REASONS

    @property
    def items(self) -> list:
        """List payload, or an empty list for non-ok and non-list results."""
        if self.is_ok and isinstance(self.value, list):
            return self.value
        return []

    def __str__(self) -> str:
        if self.is_ok:
            size = len(self.value) if isinstance(self.value, list) else 1
            return f"ok ({size})"
        return f"{self.status.value} ({self.reason.value if self.reason else 'unknown'})"


# Type aliases for better code readability
SummaryList = List[AnimeSummary]
EpisodeList = List[EpisodeRef]

# Export all models and types
__all__ = [
    "SourceId",
    "DocumentKind",
    "ResultStatus",
    "ResultReason",
    "RETRYABLE_REASONS",
    "AnimeSummary",
    "EpisodeRef",
    "AnimeDetail",
    "ScoreBucket",
    "ParseResult",
    "SummaryList",
    "EpisodeList",
]
