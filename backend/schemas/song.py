from typing import List, Optional

from pydantic import BaseModel, field_validator

from schemas.transpose import validate_key
from services.theory import parse_pasted_lyrics


class Song(BaseModel):
    title: str
    artist: Optional[str] = None
    original_key: str
    lyrics: str
    tags: List[str] = []

    @field_validator("original_key")
    @classmethod
    def original_key_must_be_known(cls, v: str) -> str:
        return validate_key(v)

    @field_validator("lyrics")
    @classmethod
    def clean_lyrics(cls, v: str) -> str:
        return parse_pasted_lyrics(v)


class SetlistSong(BaseModel):
    song: Song
    position: int = 0
    transposed_key: Optional[str] = None

    @field_validator("position")
    @classmethod
    def position_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("position must be non-negative")
        return v

    @field_validator("transposed_key")
    @classmethod
    def transposed_key_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return validate_key(v)
