"""SongSheet CLI entry point."""

import logging
import sys
from pathlib import Path

import click

from songsheet import __version__
from songsheet.chord_transposer import transpose_chord
from songsheet.layout_strategy import DEFAULT_LAYOUT_MODE, LayoutMode
from songsheet.screen import render_lines
from songsheet.session import ViewerSession
from songsheet.sheet_exporter import SUPPORTED_FORMATS, SheetExporter
from songsheet.song_loader import SongLoadError, load_song, load_song_index
from songsheet.song_models import Song

MODE_CHOICE = click.Choice([mode.value for mode in LayoutMode], case_sensitive=False)
FORMAT_CHOICE = click.Choice(sorted(SUPPORTED_FORMATS), case_sensitive=False)

VIEW_COMMANDS = {
    "+": "transpose up",
    "-": "transpose down",
    "e": "export",
    "q": "quit",
}


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_or_exit(song_file: str) -> Song:
    try:
        return load_song(song_file)
    except SongLoadError as exc:
        click.echo(f"  ERROR: Could not load song — {exc}", err=True)
        sys.exit(1)


def _echo_session(session: ViewerSession) -> None:
    click.echo(session.heading())
    click.echo(f"  Transpose: {session.transpose:+d}")
    click.echo()
    click.echo(render_lines(session.render()))
    click.echo()


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="songsheet")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """SongSheet — chord-over-lyrics viewer, transposer and exporter."""
    _configure_logging(verbose)


# ── list subcommand ────────────────────────────────────────────────────────────

@main.command("list")
@click.argument("index_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--download",
    "download_dir",
    default=None,
    metavar="DIR",
    type=click.Path(file_okay=False),
    help="Export every listed song (untransposed) into DIR.",
)
@click.option(
    "--songs-dir",
    default=None,
    metavar="DIR",
    help="Directory holding the song files. Defaults to 'songs/' next to INDEX_FILE.",
)
@click.option("--format", "output_format", type=FORMAT_CHOICE, default="pdf", show_default=True)
def list_songs(index_file: str, download_dir: str | None, songs_dir: str | None, output_format: str) -> None:
    """
    List the songs of a song index.

    INDEX_FILE is a JSON array of {"title", "filename"} objects.

    \b
    Examples:
      songsheet list songs.json
      songsheet list songs.json --download pdfs/
    """
    try:
        entries = load_song_index(index_file)
    except SongLoadError as exc:
        click.echo(f"  ERROR: Could not load song index — {exc}", err=True)
        sys.exit(1)

    for position, entry in enumerate(entries, start=1):
        click.echo(f"{position:3d}. {entry.title:<40}  {entry.filename}")

    if download_dir is None:
        return

    song_root = Path(songs_dir) if songs_dir is not None else Path(index_file).parent / "songs"
    target = Path(download_dir)
    target.mkdir(parents=True, exist_ok=True)

    click.echo()
    failures = 0
    for entry in entries:
        exporter = SheetExporter(title=entry.title, output_format=output_format)
        try:
            song = load_song(song_root / entry.filename)
            path = exporter.export(song, 0, target / exporter.default_filename(song))
        except (SongLoadError, OSError) as exc:
            failures += 1
            click.echo(f"  ERROR: {entry.title} — {exc}", err=True)
            continue
        click.echo(f"  Wrote {path}")

    if failures:
        sys.exit(1)


# ── show subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("song_file", type=click.Path(dir_okay=False))
@click.option("--transpose", "-t", type=int, default=0, show_default=True, help="Semitones to shift.")
@click.option(
    "--mode",
    type=MODE_CHOICE,
    default=DEFAULT_LAYOUT_MODE.value,
    show_default=True,
    help="Chord placement: one cell per word (slot) or at word start columns (offset).",
)
def show(song_file: str, transpose: int, mode: str) -> None:
    """
    Print a song with its chords above the lyrics.

    \b
    Examples:
      songsheet show songs/amazing_grace.json
      songsheet show songs/amazing_grace.json -t 2 --mode offset
    """
    song = _load_or_exit(song_file)
    session = ViewerSession(song, transpose=transpose, layout_mode=mode.lower())
    _echo_session(session)


# ── view subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.argument("song_file", type=click.Path(dir_okay=False))
@click.option("--mode", type=MODE_CHOICE, default=DEFAULT_LAYOUT_MODE.value, show_default=True)
@click.option("--format", "output_format", type=FORMAT_CHOICE, default="pdf", show_default=True)
@click.option(
    "--output-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Where 'e' writes the exported document.",
)
def view(song_file: str, mode: str, output_format: str, output_dir: str) -> None:
    """
    Interactively transpose a song and export it.

    Commands: '+' up a semitone, '-' down a semitone, 'e' export at the
    current key, 'q' quit.
    """
    song = _load_or_exit(song_file)
    session = ViewerSession(song, layout_mode=mode.lower())
    exporter = SheetExporter(output_format=output_format)
    _echo_session(session)

    while True:
        command = click.prompt(
            "[+/-/e/q]",
            type=click.Choice(list(VIEW_COMMANDS)),
            default="q",
            show_choices=False,
        )
        if command == "q":
            break
        if command == "+":
            session.on_transpose_up()
        elif command == "-":
            session.on_transpose_down()
        else:
            try:
                Path(output_dir).mkdir(parents=True, exist_ok=True)
                path = session.on_export(exporter, output_dir)
            except OSError as exc:
                click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
                continue
            click.echo(f"  Wrote {path}")
            continue
        _echo_session(session)


# ── export subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("song_file", type=click.Path(dir_okay=False))
@click.option("--transpose", "-t", type=int, default=0, show_default=True, help="Semitones to shift.")
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file path. Defaults to the sanitized title plus the format's extension.",
)
@click.option(
    "--title",
    default=None,
    metavar="TEXT",
    help="Title shown in the document header. Defaults to the song's title.",
)
@click.option("--format", "output_format", type=FORMAT_CHOICE, default="pdf", show_default=True)
def export(song_file: str, transpose: int, output: str | None, title: str | None, output_format: str) -> None:
    """
    Export a song as a paginated PDF or printable HTML document.

    \b
    Examples:
      songsheet export songs/amazing_grace.json
      songsheet export songs/amazing_grace.json -t -2 -o grace.pdf
      songsheet export songs/amazing_grace.json --format html
    """
    song = _load_or_exit(song_file)
    normalized_format = output_format.lower()
    exporter = SheetExporter(title=title or "", output_format=normalized_format)
    resolved_output = output if output is not None else exporter.default_filename(song)

    click.echo(f"songsheet v{__version__}")
    click.echo(f"  Song      : {song_file}")
    click.echo(f"  Transpose : {transpose:+d}")
    click.echo(f"  Format    : {normalized_format}")
    click.echo(f"  Output    : {resolved_output}")
    click.echo()

    try:
        exporter.export(song, transpose, resolved_output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)

    click.echo(f"Done!  Wrote '{resolved_output}'.")


# ── transpose subcommand ───────────────────────────────────────────────────────

@main.command()
@click.argument("chords", nargs=-1, required=True)
@click.option("--steps", "-s", type=int, default=0, show_default=True, help="Semitones to shift.")
def transpose(chords: tuple[str, ...], steps: int) -> None:
    """
    Transpose chord symbols and print them space-separated.

    \b
    Example:
      songsheet transpose G C D7 --steps 2
    """
    click.echo(" ".join(transpose_chord(chord, steps) for chord in chords))
