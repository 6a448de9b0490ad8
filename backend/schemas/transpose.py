from typing import List, Literal, Optional

from pydantic import BaseModel, field_validator

from schemas.chord import ChordPosition
from services.theory import is_known_key, normalize_note


def validate_key(v: str) -> str:
    """Reject keys outside the 12-tone scale; store the sharp spelling."""
    v = v.strip()
    if not is_known_key(v):
        raise ValueError(f"Unknown key: {v!r}")
    return normalize_note(v)


class TransposeRequest(BaseModel):
    lyrics: str
    source_key: str
    target_key: str

    @field_validator("source_key", "target_key")
    @classmethod
    def key_must_be_known(cls, v: str) -> str:
        return validate_key(v)


class TransposeResponse(BaseModel):
    source_key: str
    target_key: str
    interval_semitones: int
    lyrics: str


class RenderedLine(BaseModel):
    kind: Literal["chord", "lyric"]
    text: str
    chords: List[ChordPosition] = []


class RenderedSong(BaseModel):
    title: str
    artist: Optional[str] = None
    key: str
    original_key: str
    interval_semitones: int
    highlight_chords: bool
    chord_line_count: int = 0
    lines: List[RenderedLine]
