import logging
from typing import Optional

import click

from config import settings
from schemas.song import Song
from schemas.transpose import TransposeRequest, validate_key
from services.display import build_transpose_response, render_song
from services.theory import count_chord_lines, get_all_keys, step_key

logger = logging.getLogger(__name__)


def _key_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return validate_key(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
def cli(log_level: Optional[str]) -> None:
    """Transpose chord charts for worship setlists."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def keys() -> None:
    """List the selectable keys."""
    for key in get_all_keys():
        click.echo(key)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--from", "from_key", default=settings.default_key, callback=_key_option,
              show_default=True, help="Key the chart is written in")
@click.option("--to", "to_key", default=None, callback=_key_option,
              help="Key to transpose into")
@click.option("--semitones", type=int, default=None,
              help="Transpose by a number of semitones instead of to a key")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON document")
def transpose(
    source,
    from_key: str,
    to_key: Optional[str],
    semitones: Optional[int],
    as_json: bool,
) -> None:
    """Transpose the chord lines of SOURCE (default: stdin)."""
    if (to_key is None) == (semitones is None):
        raise click.UsageError("Give exactly one of --to or --semitones")
    if to_key is None:
        to_key = step_key(from_key, semitones)

    request = TransposeRequest(lyrics=source.read(), source_key=from_key, target_key=to_key)
    response = build_transpose_response(request)
    logger.info(
        "Transposed %s -> %s (+%d semitones)",
        response.source_key, response.target_key, response.interval_semitones,
    )

    if as_json:
        click.echo(response.model_dump_json(indent=2))
    else:
        click.echo(response.lyrics, nl=False)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--from", "from_key", default=settings.default_key, callback=_key_option,
              show_default=True, help="Key the chart is written in")
@click.option("--to", "to_key", default=None, callback=_key_option,
              help="Key to display the chart in")
@click.option("--title", default=None, help="Song title (default: file name)")
@click.option("--no-highlight", is_flag=True, help="Do not mark chord lines for highlighting")
def render(
    source,
    from_key: str,
    to_key: Optional[str],
    title: Optional[str],
    no_highlight: bool,
) -> None:
    """Print SOURCE as chord and lyric lines with chord positions (JSON)."""
    song = Song(
        title=title or source.name,
        original_key=from_key,
        lyrics=source.read(),
    )
    logger.info("Found %d lines with chord notation", count_chord_lines(song.lyrics))
    rendered = render_song(song, to_key, highlight_chords=False if no_highlight else None)
    click.echo(rendered.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
