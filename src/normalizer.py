"""
ACRCloud Response Normalization
Maps the provider's reply envelope onto the closed set of identify outcomes.
"""

import math
from typing import Any, Mapping, Optional, Sequence

from models import (
    IdentifyOutcome,
    InvalidCredentials,
    NotFound,
    RateLimited,
    SongResult,
    Success,
    UnknownFormat,
)

STATUS_SUCCESS = 0
STATUS_NO_RESULT = 1001
STATUS_INVALID_ACCESS_KEY = 3001
STATUS_LIMIT_EXCEEDED = 3003

DEFAULT_CONFIDENCE = 95
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={vid}"


def lookup(value: Any, *path: Any) -> Any:
    """
    Walk a nested JSON value one key or index at a time.

    Returns None as soon as a step is missing or lands on something that cannot
    be indexed that way.
    """
    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return None
            if step >= len(current) or step < -len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def _text(value: Any, default: Optional[str] = None) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return default


def _number(value: Any) -> Optional[float]:
    """Numeric value of a JSON scalar, accepting numeric strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        # Integers beyond float range overflow instead of becoming inf
        return None
    if not math.isfinite(number):
        return None
    return number


def _status_code(reply: Any) -> Optional[int]:
    code = lookup(reply, "status", "code")
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code


def _confidence(score: Any) -> int:
    number = _number(score)
    if number is None or not math.isfinite(number * 100):
        return DEFAULT_CONFIDENCE
    # Half-up rounding; a score that rounds to 0 also falls back to the default
    return math.floor(number * 100 + 0.5) or DEFAULT_CONFIDENCE


def _duration(duration_ms: Any) -> Optional[int]:
    number = _number(duration_ms)
    if not number:
        return None
    return math.floor(number / 1000)


def _release_year(release_date: Any) -> str:
    release_date = _text(release_date)
    if release_date is None:
        return "Unknown"
    return release_date[:4]


def _youtube_url(vid: Any) -> Optional[str]:
    if isinstance(vid, bool) or not isinstance(vid, (str, int)) or vid == "":
        return None
    return YOUTUBE_WATCH_URL.format(vid=vid)


def extract_song(match: Any) -> SongResult:
    """Flatten one provider match into a SongResult, defaulting every missing field."""
    external = lookup(match, "external_metadata")

    return SongResult(
        title=_text(lookup(match, "title"), "Unknown Title"),
        artist=_text(lookup(match, "artists", 0, "name"), "Unknown Artist"),
        album=_text(lookup(match, "album", "name"), "Unknown Album"),
        release_year=_release_year(lookup(match, "release_date")),
        confidence_percent=_confidence(lookup(match, "score")),
        duration_seconds=_duration(lookup(match, "duration_ms")),
        spotify_url=_text(lookup(external, "spotify", "track", "external_urls", "spotify")),
        youtube_url=_youtube_url(lookup(external, "youtube", "vid")),
        apple_music_url=_text(lookup(external, "apple_music", "url")),
        cover_art_url=_text(lookup(match, "album", "artwork_url_500"))
        or _text(lookup(match, "album", "artwork_url")),
        preview_url=_text(lookup(external, "spotify", "track", "preview_url")),
    )


def normalize(reply: Any) -> IdentifyOutcome:
    """
    Convert a raw provider reply into exactly one outcome.

    Only the first candidate in metadata.music is considered. A code 0 reply
    without candidates is not a success and falls through to UnknownFormat.
    """
    code = _status_code(reply)
    music = lookup(reply, "metadata", "music")

    if code == STATUS_SUCCESS and isinstance(music, list) and music:
        return Success(song=extract_song(music[0]))
    if code == STATUS_NO_RESULT:
        return NotFound()
    if code == STATUS_INVALID_ACCESS_KEY:
        return InvalidCredentials()
    if code == STATUS_LIMIT_EXCEEDED:
        return RateLimited()
    return UnknownFormat(data=reply)
