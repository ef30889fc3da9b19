from __future__ import annotations

import csv
import logging
import math
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Protocol

from .textutils import normalize_word

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .models import TaggedDocument

LOGGER = logging.getLogger(__name__)

FIELDNAMES = ["word", "frequency", "pct", "per_million", "rank", "doc_frequency", "idf"]


@dataclass(frozen=True, slots=True)
class FrequencyEntry:
    frequency: int
    pct: float
    per_million: float
    rank: int
    doc_frequency: int = 0
    idf: float | None = None


class CorpusFrequency(Protocol):
    """Read-only frequency lookup used by the statistics layer."""

    def lookup(self, word: str, case_sensitive: bool = False) -> FrequencyEntry | None:
        ...


class FrequencyTable:
    """In-memory corpus frequency table keyed by case-folded and exact word forms."""

    def __init__(
        self,
        exact: Dict[str, FrequencyEntry],
        folded: Dict[str, FrequencyEntry] | None = None,
    ) -> None:
        self._exact = dict(exact)
        self._folded = dict(folded) if folded is not None else _fold_entries(self._exact)

    def __len__(self) -> int:
        return len(self._exact)

    def lookup(self, word: str, case_sensitive: bool = False) -> FrequencyEntry | None:
        if case_sensitive:
            return self._exact.get(normalize_word(word, case_sensitive=True))
        return self._folded.get(normalize_word(word))

    def items(self) -> Iterable[tuple[str, FrequencyEntry]]:
        return self._exact.items()


def build_frequency_table(documents: Iterable["TaggedDocument"]) -> FrequencyTable:
    """
    Count word tokens over a set of documents.

    Only rows with a word tag are counted. ``idf`` is the natural log of the
    number of documents over the number of documents containing the word.
    """
    exact_counts: Counter[str] = Counter()
    folded_counts: Counter[str] = Counter()
    exact_df: Counter[str] = Counter()
    folded_df: Counter[str] = Counter()
    num_docs = 0
    for document in documents:
        num_docs += 1
        words = [
            normalize_word(row.token, case_sensitive=True)
            for row in document.original_table
            if document.tags.is_word_tag(row.tag)
        ]
        exact_counts.update(words)
        folded = [word.lower() for word in words]
        folded_counts.update(folded)
        exact_df.update(set(words))
        folded_df.update(set(folded))

    if not exact_counts:
        LOGGER.warning("No word tokens found; frequency table is empty.")
    return FrequencyTable(
        exact=_rank_counts(exact_counts, exact_df, num_docs),
        folded=_rank_counts(folded_counts, folded_df, num_docs),
    )


def load_frequency_table(path: Path) -> FrequencyTable:
    """
    Load a TSV table mapping words to FrequencyEntry values.

    Parameters
    ----------
    path:
        TSV with the columns written by ``write_frequency_table``.
    """
    table: Dict[str, FrequencyEntry] = {}
    if not path.exists():
        LOGGER.warning("Frequency table %s does not exist.", path)
        return FrequencyTable(table)

    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, delimiter="\t")
        for row in reader:
            idf = row.get("idf")
            table[row["word"]] = FrequencyEntry(
                frequency=int(row["frequency"]),
                pct=float(row["pct"]),
                per_million=float(row["per_million"]),
                rank=int(row["rank"]),
                doc_frequency=int(row.get("doc_frequency") or 0),
                idf=float(idf) if idf else None,
            )
    return FrequencyTable(table)


def write_frequency_table(table: FrequencyTable, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES, delimiter="\t")
        writer.writeheader()
        for word, entry in sorted(table.items(), key=lambda item: item[1].rank):
            writer.writerow(
                {
                    "word": word,
                    "frequency": entry.frequency,
                    "pct": f"{entry.pct:.9f}",
                    "per_million": f"{entry.per_million:.6f}",
                    "rank": entry.rank,
                    "doc_frequency": entry.doc_frequency,
                    "idf": "" if entry.idf is None else f"{entry.idf:.12f}",
                }
            )
    LOGGER.info("Wrote %d frequency entries to %s.", len(table), path)


def _rank_counts(
    counts: Counter[str], doc_counts: Counter[str], num_docs: int
) -> Dict[str, FrequencyEntry]:
    total = sum(counts.values())
    entries: Dict[str, FrequencyEntry] = {}
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    for rank, (word, count) in enumerate(ordered, start=1):
        df = doc_counts[word]
        entries[word] = FrequencyEntry(
            frequency=count,
            pct=100.0 * count / total,
            per_million=count * 1_000_000.0 / total,
            rank=rank,
            doc_frequency=df,
            idf=math.log(num_docs / df) if df else None,
        )
    return entries


def _fold_entries(exact: Dict[str, FrequencyEntry]) -> Dict[str, FrequencyEntry]:
    counts: Counter[str] = Counter()
    doc_counts: Counter[str] = Counter()
    for word, entry in exact.items():
        counts[word.lower()] += entry.frequency
        doc_counts[word.lower()] = max(doc_counts[word.lower()], entry.doc_frequency)
    if not counts:
        return {}
    folded = _rank_counts(counts, Counter(), 0)
    # document frequency cannot be recovered exactly once case variants are merged
    return {
        word: FrequencyEntry(
            frequency=entry.frequency,
            pct=entry.pct,
            per_million=entry.per_million,
            rank=entry.rank,
            doc_frequency=doc_counts[word],
            idf=None,
        )
        for word, entry in folded.items()
    }
