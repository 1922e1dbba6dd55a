from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SongResult(BaseModel):
    """Flattened metadata for the top-ranked match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = "Unknown Title"
    artist: str = "Unknown Artist"
    album: str = "Unknown Album"
    release_year: str = Field("Unknown", serialization_alias="year")
    confidence_percent: int = Field(95, serialization_alias="confidence")
    duration_seconds: Optional[int] = Field(None, serialization_alias="duration")
    spotify_url: Optional[str] = None
    youtube_url: Optional[str] = None
    apple_music_url: Optional[str] = Field(None, serialization_alias="apple_url")
    cover_art_url: Optional[str] = Field(None, serialization_alias="cover_art")
    preview_url: Optional[str] = None
    is_real: bool = Field(True, serialization_alias="isReal")


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    song: SongResult

    def to_response(self) -> Dict[str, Any]:
        return {"success": True, "song": self.song.model_dump(by_alias=True)}


class NotFound(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["not_found"] = "not_found"
    code: int = 1001
    error: str = "No music found in database"

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error, "code": self.code}


class InvalidCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid_credentials"] = "invalid_credentials"
    code: int = 3001
    error: str = "Invalid access key"

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error, "code": self.code}


class RateLimited(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rate_limited"] = "rate_limited"
    code: int = 3003
    error: str = "Rate limit exceeded"

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error, "code": self.code}


class UnknownFormat(BaseModel):
    """Reply shape the normalizer does not recognize; carries the raw reply."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown_format"] = "unknown_format"
    data: Any = None
    error: str = "Unknown response format"

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error, "data": self.data}


IdentifyOutcome = Union[Success, NotFound, InvalidCredentials, RateLimited, UnknownFormat]


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
    acrcloud_configured: bool
