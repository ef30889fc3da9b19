from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Literal, Mapping, Union, cast

import click
import pandas as pd

from .diff import apply_transform, changed_rows, diff
from .errors import InvalidArgument
from .models import TaggedDocument
from .stats import describe, summarize
from .textutils import clozify, paste_text

LOGGER = logging.getLogger(__name__)

CLOZE_TRANSFORM = "clozeDelete"
TEXT_TRANSFORM = "textTransform"
TEXT_SCHEMES = ("lower", "upper", "capitalize", "normalize")

Offset = Union[int, Literal["all"]]


@dataclass(slots=True)
class ClozeVariantReport:
    """Statistics of one cloze variant produced while iterating all offsets."""

    offset: int
    document: TaggedDocument
    changed: pd.DataFrame
    summary: pd.DataFrame
    letters_removed: int
    letters_total: int

    @property
    def pct_removed(self) -> float:
        if not self.letters_total:
            return 0.0
        return 100.0 * self.letters_removed / self.letters_total

    def format(self) -> str:
        title = f"Cloze variant {self.offset + 1} (offset {self.offset})"
        lines = [
            title,
            "=" * len(title),
            "",
            text_of(self.document),
            "",
            f"Changed text (offset {self.offset}):",
            self.changed[["index", "original", "token", "tag", "wclass", "letters"]].to_string(
                index=False
            ),
            "",
            f"Statistics (offset {self.offset}):",
            self.summary.to_string(float_format=lambda value: f"{value:.2f}"),
            "",
            f"Cloze deletion took {self.letters_removed} letters ({self.pct_removed:.2f}%)",
            "",
        ]
        return "\n".join(lines)


def text_of(document: TaggedDocument) -> str:
    """Current tokens of a document pasted back into running text."""
    tags = document.tags
    return paste_text(
        document.table.tokens, (tags.is_punctuation_tag(tag) for tag in document.table.tags)
    )


def cloze_positions(document: TaggedDocument, period: int, offset: int) -> list[int]:
    """
    Row positions masked by a cloze deletion.

    The first ``offset`` word rows are skipped, then every ``period``-th of
    the remaining word rows is selected.
    """
    _validate_cloze(period, offset)
    eligible = [
        row.index for row in document.table if document.tags.is_word_tag(row.tag)
    ]
    remaining = eligible[offset:]
    return [
        position
        for ordinal, position in enumerate(remaining, start=1)
        if ordinal % period == 0
    ]


def cloze_delete(
    document: TaggedDocument,
    period: int = 5,
    offset: Offset = 0,
    blank_char: str = "_",
    blank_width: int = 10,
    *,
    echo: Callable[[str], None] = click.echo,
) -> TaggedDocument | None:
    """
    Transform a document into cloze test format.

    Every ``period``-th word (after skipping ``offset`` words) is replaced by a
    blank of ``blank_width`` characters, or as wide as the word when
    ``blank_width`` is 0. ``offset="all"`` does not return a document; it
    writes a report for every possible offset through ``echo`` instead.
    """
    if isinstance(offset, str):
        if offset != "all":
            raise InvalidArgument(f"offset must be an integer or 'all', got {offset!r}.")
        for report in iter_cloze_variants(document, period, blank_char, blank_width):
            echo(report.format())
        return None

    _validate_blank(blank_char, blank_width)
    positions = set(cloze_positions(document, period, offset))
    new_tokens = []
    for row in document.table:
        if row.index not in positions:
            new_tokens.append(row.token)
        elif blank_width == 0:
            new_tokens.append(clozify(row.token, blank_char))
        else:
            new_tokens.append(blank_char * blank_width)
    LOGGER.debug(
        "Cloze deletion masked %d tokens of %s (period %d, offset %d).",
        len(positions),
        document.doc_id,
        period,
        offset,
    )
    return apply_transform(document, new_tokens, CLOZE_TRANSFORM)


def iter_cloze_variants(
    document: TaggedDocument,
    period: int = 5,
    blank_char: str = "_",
    blank_width: int = 10,
) -> Iterator[ClozeVariantReport]:
    """
    Reports for each offset from 0 to ``period - 1``.

    Parameters are checked on the call, before the first report is built.
    """
    _validate_cloze(period, 0)
    _validate_blank(blank_char, blank_width)
    return _cloze_variants(document, period, blank_char, blank_width)


def _cloze_variants(
    document: TaggedDocument, period: int, blank_char: str, blank_width: int
) -> Iterator[ClozeVariantReport]:
    letters_total = describe(document).letters
    for offset in range(period):
        variant = cast(
            TaggedDocument, cloze_delete(document, period, offset, blank_char, blank_width)
        )
        # rows changed by this run only
        mask = diff(variant)
        changed = changed_rows(variant, mask)
        letters_removed = sum(
            row.letters for row, selected in zip(document.table, mask) if selected
        )
        yield ClozeVariantReport(
            offset=offset,
            document=variant,
            changed=changed,
            summary=summarize(variant, mask),
            letters_removed=letters_removed,
            letters_total=letters_total,
        )


def text_transform(
    document: TaggedDocument,
    scheme: str,
    *,
    query: Mapping[str, str] | None = None,
    case_sensitive: bool = False,
) -> TaggedDocument:
    """
    Change the letter case of word tokens, or replace them via ``query``.

    Schemes: ``lower``, ``upper``, ``capitalize`` and ``normalize`` (tokens
    found in ``query`` are replaced by their mapped value).
    """
    if scheme not in TEXT_SCHEMES:
        raise InvalidArgument(f"Unknown scheme {scheme!r}; expected one of {TEXT_SCHEMES}.")
    lookup: Dict[str, str] = {}
    if scheme == "normalize":
        if not query:
            raise InvalidArgument("The 'normalize' scheme needs a non-empty query.")
        lookup = dict(query) if case_sensitive else {k.lower(): v for k, v in query.items()}

    new_tokens = []
    for row in document.table:
        token = row.token
        if document.tags.is_word_tag(row.tag):
            if scheme == "lower":
                token = token.lower()
            elif scheme == "upper":
                token = token.upper()
            elif scheme == "capitalize":
                token = token[:1].upper() + token[1:]
            else:
                key = token if case_sensitive else token.lower()
                token = lookup.get(key, token)
        new_tokens.append(token)
    return apply_transform(document, new_tokens, TEXT_TRANSFORM)


def _validate_cloze(period: int, offset: int) -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise InvalidArgument(f"period must be a positive integer, got {period!r}.")
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise InvalidArgument(f"offset must be an integer, got {offset!r}.")
    if offset < 0 or offset >= period:
        raise InvalidArgument(
            f"offset must be between 0 and {period - 1} for period {period}, got {offset}."
        )


def _validate_blank(blank_char: str, blank_width: int) -> None:
    if not isinstance(blank_char, str) or len(blank_char) != 1:
        raise InvalidArgument(f"blank_char must be a single character, got {blank_char!r}.")
    if isinstance(blank_width, bool) or not isinstance(blank_width, int) or blank_width < 0:
        raise InvalidArgument(f"blank_width must be a non-negative integer, got {blank_width!r}.")
