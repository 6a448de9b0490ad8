import logging
import re
from typing import List

from schemas.chord import ChordPosition

logger = logging.getLogger(__name__)

# Canonical chromatic scale, sharps only, starting at C
NOTES = (
    "C", "C#", "D", "D#", "E", "F",
    "F#", "G", "G#", "A", "A#", "B",
)

# Flat spellings accepted on input; everything is stored sharp
FLAT_TO_SHARP = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

CHORD_QUALITIES = ("m", "maj", "min", "dim", "aug", "sus", "add")

# A line is a chord line when more than this share of its words are chords
CHORD_LINE_THRESHOLD = 0.4

_CHORD_GRAMMAR = r"([A-G][b#]?)(" + "|".join(CHORD_QUALITIES) + r")?(\d*)"

# Whole-word chord, e.g. 'C', 'F#m', 'Bbmaj7', 'Gsus4'
_CHORD_WORD_RE = re.compile(_CHORD_GRAMMAR)

# Chord tokens inside a line. A preceding '#' rules a token out; a following
# one is left to the greedy accidental, so 'C#' stays whole and 'C7#9' gives 'C7'.
_CHORD_TOKEN_RE = re.compile(r"(?<![\w#])" + _CHORD_GRAMMAR + r"(?!\w)")


def get_all_keys() -> List[str]:
    """Return the 12 selectable keys, C first."""
    return list(NOTES)


def normalize_note(note: str) -> str:
    """Return the sharp spelling of a flat note name ('Bb' -> 'A#').

    Anything that is not a known flat spelling is returned unchanged.
    """
    return FLAT_TO_SHARP.get(note, note)


def _note_index(note: str) -> int | None:
    normalized = normalize_note(note)
    if normalized not in NOTES:
        return None
    return NOTES.index(normalized)


def is_known_key(key: str) -> bool:
    """True if `key` (sharp or flat spelling) is one of the 12 keys."""
    return _note_index(key) is not None


def get_semitone_difference(from_key: str, to_key: str) -> int:
    """Return the upward distance in semitones (0-11) from one key to another.

    Unrecognized keys give 0, i.e. no transposition.
    """
    from_index = _note_index(from_key)
    to_index = _note_index(to_key)
    if from_index is None or to_index is None:
        logger.debug("Cannot resolve keys %r -> %r, not transposing", from_key, to_key)
        return 0
    return (to_index - from_index) % 12


def step_key(key: str, steps: int) -> str:
    """Move a key up (positive) or down (negative) by `steps` semitones."""
    index = _note_index(key)
    if index is None:
        return key
    return NOTES[(index + steps) % 12]


def is_chord_line(line: str) -> bool:
    """Detect whether a line of song text holds chords rather than lyrics."""
    words = line.split()
    if not words:
        return False

    chord_words = [w for w in words if _CHORD_WORD_RE.fullmatch(w)]
    return len(chord_words) / len(words) > CHORD_LINE_THRESHOLD


def parse_chord_line(line: str) -> List[ChordPosition]:
    """Extract chords and their character offsets from a chord line."""
    return [
        ChordPosition(chord=m.group(0), position=m.start())
        for m in _CHORD_TOKEN_RE.finditer(line)
    ]


def transpose_chord(text: str, semitones: int) -> str:
    """Transpose every chord found in `text` by a semitone interval.

    Quality and extension are kept; only the root moves. Text around the
    chords is left as is.
    """

    def _replace(m: re.Match) -> str:
        root, quality, number = m.group(1), m.group(2) or "", m.group(3)
        index = _note_index(root)
        if index is None:
            return m.group(0)
        return NOTES[(index + semitones) % 12] + quality + number

    return _CHORD_TOKEN_RE.sub(_replace, text)


def transpose_lyrics(lyrics: str, semitones: int) -> str:
    """Transpose the chord lines of a song, leaving lyric lines untouched."""
    if semitones == 0:
        return lyrics

    lines = lyrics.split("\n")
    return "\n".join(
        transpose_chord(line, semitones) if is_chord_line(line) else line
        for line in lines
    )


def transpose_to_key(lyrics: str, from_key: str, to_key: str) -> str:
    """Transpose a song's chords from its stored key to a display key."""
    semitones = get_semitone_difference(from_key, to_key)
    return transpose_lyrics(lyrics, semitones)


def parse_pasted_lyrics(text: str) -> str:
    # Chords are expected on their own lines; detection happens at display time
    return text.strip()


def count_chord_lines(text: str) -> int:
    """Number of lines in pasted song text that hold chord notation."""
    return sum(1 for line in text.split("\n") if is_chord_line(line))
