from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

import typer
import yaml

from .config import TagTextConfig, load_config
from .errors import TagTextError
from .models import TaggedDocument
from .session import AnalysisSession
from .stats import describe, summarize
from .transforms import text_of

app = typer.Typer(help="Tagged text analysis CLI.", no_args_is_help=True)


def _float_format(value: float) -> str:
    return f"{value:.2f}"


@app.command("describe")
def describe_command(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
    language: str | None = typer.Option(None, "--language", "-l"),
) -> None:
    """Print descriptive statistics of a tagged file as JSON."""
    session = _build_session(config, language)
    document = _load_document(session, input_path)
    typer.echo(json.dumps(describe(document).to_dict(), indent=2))


@app.command()
def summary(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
    language: str | None = typer.Option(None, "--language", "-l"),
) -> None:
    """Print sentence/word/letter counts and the word class distribution."""
    session = _build_session(config, language)
    document = _load_document(session, input_path)
    _echo_summary(document, selection=None)


@app.command()
def cloze(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
    language: str | None = typer.Option(None, "--language", "-l"),
    period: int | None = typer.Option(None, "--period", help="Mask every n-th word."),
    offset: str | None = typer.Option(
        None, "--offset", help="Number of words to skip first, or 'all'."
    ),
    blank_char: str | None = typer.Option(None, "--blank-char"),
    blank_width: int | None = typer.Option(
        None, "--blank-width", help="Blank length; 0 matches the word's width."
    ),
) -> None:
    """Transform a tagged file into cloze test format."""
    session = _build_session(config, language)
    document = _load_document(session, input_path)
    parsed_offset = _parse_offset(offset)
    try:
        result = session.cloze(document, period, parsed_offset, blank_char, blank_width)
    except TagTextError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if result is None:
        return
    typer.echo(text_of(result))
    typer.echo("")
    _echo_summary(result, selection="clozeDelete")


@app.command("hyphen")
def hyphen_command(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
    language: str | None = typer.Option(None, "--language", "-l"),
    min_length: int | None = typer.Option(None, "--min-length"),
) -> None:
    """Print the hyphenation of every eligible word."""
    session = _build_session(config, language)
    if min_length is not None:
        session.config.hyphen_min_length = min_length
    document = _load_document(session, input_path)
    try:
        result = session.hyphen(document)
    except TagTextError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(result.to_frame().to_string(index=False))
    typer.echo(f"\nTotal syllables: {result.total_syllables}")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = TagTextConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def read_tagged_file(path: Path) -> List[Tuple[str, str, str]]:
    """Read TreeTagger-style ``token<TAB>tag<TAB>lemma`` lines, skipping SGML lines."""
    triples: List[Tuple[str, str, str]] = []
    lines = path.read_text(encoding="utf-8").splitlines()
    for line_no, line in enumerate(lines, start=1):
        if not line.strip() or line.startswith("<"):
            continue
        # some tagger versions emit duplicate tab stops
        fields = [value for value in line.split("\t") if value != ""]
        if len(fields) == 2:
            fields.append(fields[0])
        if len(fields) != 3:
            raise typer.BadParameter(
                f"{path}:{line_no}: expected token, tag and lemma separated by tabs."
            )
        triples.append((fields[0], fields[1], fields[2]))
    return triples


def _build_session(config: Path | None, language: str | None) -> AnalysisSession:
    try:
        cfg = load_config(config)
        if language:
            cfg.language = language
        return AnalysisSession(cfg)
    except TagTextError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load_document(session: AnalysisSession, input_path: Path) -> TaggedDocument:
    triples = read_tagged_file(input_path)
    try:
        return session.ingest(triples, doc_id=input_path.name)
    except TagTextError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_offset(offset: str | None) -> int | str | None:
    if offset is None or offset == "all":
        return offset
    try:
        return int(offset)
    except ValueError as exc:
        raise typer.BadParameter(f"offset must be an integer or 'all', got {offset!r}.") from exc


def _echo_summary(document: TaggedDocument, selection: str | None) -> None:
    desc = describe(document)
    typer.echo(f"Sentences: {desc.sentences}")
    typer.echo(f"Words:     {desc.words} ({desc.avg_sentence_length:.2f} per sentence)")
    typer.echo(f"Letters:   {desc.letters} ({desc.avg_word_length:.2f} per word)")
    typer.echo("\nWord class distribution:\n")
    table = summarize(document, selection)
    typer.echo(table.to_string(float_format=_float_format))


if __name__ == "__main__":
    main()
