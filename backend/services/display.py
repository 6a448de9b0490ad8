import logging
from typing import List, Optional

from config import settings
from schemas.song import SetlistSong, Song
from schemas.transpose import (
    RenderedLine,
    RenderedSong,
    TransposeRequest,
    TransposeResponse,
)
from services.theory import (
    get_semitone_difference,
    is_chord_line,
    normalize_note,
    parse_chord_line,
    transpose_to_key,
)

logger = logging.getLogger(__name__)


def effective_key(entry: SetlistSong) -> str:
    """Key a setlist entry is played in: its override, else the song's key."""
    return entry.transposed_key or entry.song.original_key


def _render_lines(lyrics: str) -> List[RenderedLine]:
    lines: List[RenderedLine] = []
    for line in lyrics.split("\n"):
        if is_chord_line(line):
            lines.append(RenderedLine(
                kind="chord",
                text=line,
                chords=parse_chord_line(line),
            ))
        else:
            lines.append(RenderedLine(kind="lyric", text=line))
    return lines


def render_song(
    song: Song,
    key: Optional[str] = None,
    highlight_chords: Optional[bool] = None,
) -> RenderedSong:
    """Transpose a song into `key` and split it into chord and lyric lines.

    Chord lines carry the position of each chord so the caller can place
    them above the lyric that follows.
    """
    target_key = normalize_note(key) if key else song.original_key
    if highlight_chords is None:
        highlight_chords = settings.highlight_chords

    interval = get_semitone_difference(song.original_key, target_key)
    lyrics = transpose_to_key(song.lyrics, song.original_key, target_key)
    lines = _render_lines(lyrics)

    logger.debug(
        "Rendered %r in %s (+%d semitones, %d lines)",
        song.title, target_key, interval, len(lines),
    )
    return RenderedSong(
        title=song.title,
        artist=song.artist,
        key=target_key,
        original_key=song.original_key,
        interval_semitones=interval,
        highlight_chords=highlight_chords,
        chord_line_count=sum(1 for line in lines if line.kind == "chord"),
        lines=lines,
    )


def render_setlist_entry(
    entry: SetlistSong, highlight_chords: Optional[bool] = None
) -> RenderedSong:
    return render_song(entry.song, effective_key(entry), highlight_chords)


def render_setlist(
    entries: List[SetlistSong], highlight_chords: Optional[bool] = None
) -> List[RenderedSong]:
    """Render a whole setlist in running order."""
    ordered = sorted(entries, key=lambda e: e.position)
    return [render_setlist_entry(e, highlight_chords) for e in ordered]


def build_transpose_response(request: TransposeRequest) -> TransposeResponse:
    interval = get_semitone_difference(request.source_key, request.target_key)
    return TransposeResponse(
        source_key=request.source_key,
        target_key=request.target_key,
        interval_semitones=interval,
        lyrics=transpose_to_key(request.lyrics, request.source_key, request.target_key),
    )
