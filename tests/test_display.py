from schemas.song import SetlistSong, Song
from schemas.transpose import TransposeRequest
from services.display import (
    build_transpose_response,
    effective_key,
    render_setlist,
    render_setlist_entry,
    render_song,
)

LYRICS = "C       G\nAmazing grace\n\nAm   F\nHow sweet the sound"


def _song(**overrides) -> Song:
    data = {
        "title": "Amazing Grace",
        "artist": "John Newton",
        "original_key": "C",
        "lyrics": LYRICS,
    }
    data.update(overrides)
    return Song(**data)


def test_effective_key_prefers_override() -> None:
    song = _song()
    assert effective_key(SetlistSong(song=song)) == "C"
    assert effective_key(SetlistSong(song=song, transposed_key="Eb")) == "D#"


def test_render_song_in_original_key() -> None:
    rendered = render_song(_song())

    assert rendered.key == "C"
    assert rendered.interval_semitones == 0
    assert rendered.highlight_chords is True
    assert rendered.chord_line_count == 2
    assert [line.kind for line in rendered.lines] == ["chord", "lyric", "lyric", "chord", "lyric"]
    assert [line.text for line in rendered.lines] == LYRICS.split("\n")


def test_render_song_transposes_and_positions_chords() -> None:
    rendered = render_song(_song(), "D")

    assert rendered.key == "D"
    assert rendered.original_key == "C"
    assert rendered.interval_semitones == 2
    first = rendered.lines[0]
    assert first.text == "D       A"
    assert [(c.chord, c.position) for c in first.chords] == [("D", 0), ("A", 8)]
    assert rendered.lines[1].text == "Amazing grace"
    assert rendered.lines[1].chords == []
    assert [c.chord for c in rendered.lines[3].chords] == ["Bm", "G"]


def test_render_song_normalizes_flat_target() -> None:
    rendered = render_song(_song(), "Bb")
    assert rendered.key == "A#"
    assert rendered.lines[0].text == "A#       F"


def test_render_song_highlight_override() -> None:
    rendered = render_song(_song(), highlight_chords=False)
    assert rendered.highlight_chords is False


def test_render_setlist_entry_uses_override() -> None:
    entry = SetlistSong(song=_song(), transposed_key="G")
    rendered = render_setlist_entry(entry)
    assert rendered.key == "G"
    assert rendered.lines[0].text == "G       D"


def test_render_setlist_orders_by_position() -> None:
    entries = [
        SetlistSong(song=_song(title="Second"), position=2),
        SetlistSong(song=_song(title="First"), position=1, transposed_key="D"),
    ]
    rendered = render_setlist(entries)
    assert [r.title for r in rendered] == ["First", "Second"]
    assert [r.key for r in rendered] == ["D", "C"]


def test_build_transpose_response() -> None:
    request = TransposeRequest(lyrics="C       G\nAmazing grace", source_key="C", target_key="D")
    response = build_transpose_response(request)

    assert response.source_key == "C"
    assert response.target_key == "D"
    assert response.interval_semitones == 2
    assert response.lyrics == "D       A\nAmazing grace"
