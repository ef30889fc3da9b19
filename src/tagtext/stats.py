from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import pandas as pd

from .diff import Selection, diff
from .frequency import CorpusFrequency
from .models import TaggedDocument, TokenRecord

SUMMARY_COLUMNS = ["num", "pct"]
SELECTION_COLUMNS = ["num_transfmt", "pct_transfmt", "pct_transfmt_abs", "pct_transfmt_wclass"]


@dataclass(slots=True)
class DocumentDescription:
    """Descriptive statistics of a document's original tokens."""

    doc_id: str
    tokens: int
    sentences: int
    words: int
    letters: int
    all_chars: int
    avg_sentence_length: float
    avg_word_length: float
    lemmata: int
    questions: int
    exclamations: int
    semicolons: int
    colons: int

    def to_dict(self) -> dict[str, Any]:
        return dict(asdict(self))

    def to_frame(self) -> pd.DataFrame:
        values = self.to_dict()
        values.pop("doc_id")
        return pd.DataFrame({"freq": pd.Series(values)})


def describe(document: TaggedDocument) -> DocumentDescription:
    """Compute sentence, word and letter counts over the original tokens."""
    rows = list(document.original_table)
    word_rows = [row for row in rows if document.tags.is_word_tag(row.tag)]
    words = len(word_rows)
    sentences = len({row.sentence_index for row in word_rows})
    letters = sum(row.letters for row in word_rows)
    punctuation = Counter(row.token for row in rows)
    lemmata = {row.lemma for row in word_rows if row.lemma and row.lemma != "<unknown>"}
    return DocumentDescription(
        doc_id=document.doc_id,
        tokens=len(rows),
        sentences=sentences,
        words=words,
        letters=letters,
        all_chars=sum(len(row.token) for row in rows),
        avg_sentence_length=words / sentences if sentences else 0.0,
        avg_word_length=letters / words if words else 0.0,
        lemmata=len(lemmata),
        questions=punctuation["?"],
        exclamations=punctuation["!"],
        semicolons=punctuation[";"],
        colons=punctuation[":"],
    )


def summarize(document: TaggedDocument, selection: Selection = None) -> pd.DataFrame:
    """
    Word class distribution of a document.

    Word classes are ordered by descending count, punctuation classes follow
    with empty percentages. When ``selection`` is given (a transformation
    name, ``"all changed"`` or a boolean mask) the distribution of the
    selected rows is added.
    """
    rows = list(document.table)
    word_classes = document.tags.word_classes
    counts = Counter(row.wclass for row in rows)
    word_counts = sorted(
        ((wclass, num) for wclass, num in counts.items() if wclass in word_classes),
        key=lambda item: -item[1],
    )
    other_counts = [(wclass, num) for wclass, num in counts.items() if wclass not in word_classes]
    word_total = sum(num for _, num in word_counts)

    records: List[Dict[str, Any]] = []
    for wclass, num in word_counts:
        records.append({"num": num, "pct": _percent(num, word_total)})
    for wclass, num in other_counts:
        records.append({"num": num, "pct": None})

    columns = list(SUMMARY_COLUMNS)
    if selection is not None:
        mask = diff(document, selection)
        selected = _selected_counts(rows, mask)
        selected_total = sum(selected[wclass] for wclass, _ in word_counts)
        for record, (wclass, num) in zip(records, word_counts):
            num_selected = selected[wclass]
            record.update(
                num_transfmt=num_selected,
                pct_transfmt=_percent(num_selected, selected_total),
                pct_transfmt_abs=_percent(num_selected, word_total),
                pct_transfmt_wclass=_percent(num_selected, num),
            )
        for record, (wclass, _) in zip(records[len(word_counts) :], other_counts):
            record.update(
                num_transfmt=selected[wclass],
                pct_transfmt=None,
                pct_transfmt_abs=None,
                pct_transfmt_wclass=None,
            )
        columns.extend(SELECTION_COLUMNS)

    index = pd.Index([wclass for wclass, _ in word_counts + other_counts], name="wclass")
    frame = pd.DataFrame(records, index=index, columns=columns)
    for column in ("pct", "pct_transfmt", "pct_transfmt_abs", "pct_transfmt_wclass"):
        if column in frame:
            frame[column] = frame[column].astype(float)
    return frame


def frequency_profile(
    document: TaggedDocument, corpus: CorpusFrequency, case_sensitive: bool = False
) -> pd.DataFrame:
    """Look up every word token of the document in a corpus frequency table."""
    records: List[Dict[str, Any]] = []
    for row in document.table:
        if not document.tags.is_word_tag(row.tag):
            continue
        entry = corpus.lookup(row.token, case_sensitive)
        records.append(
            {
                "index": row.index,
                "token": row.token,
                "wclass": row.wclass,
                "frequency": entry.frequency if entry else None,
                "pct": entry.pct if entry else None,
                "per_million": entry.per_million if entry else None,
                "rank": entry.rank if entry else None,
                "idf": entry.idf if entry else None,
            }
        )
    return pd.DataFrame(
        records,
        columns=["index", "token", "wclass", "frequency", "pct", "per_million", "rank", "idf"],
    )


def _selected_counts(rows: List[TokenRecord], mask: List[bool]) -> Counter[str]:
    return Counter(row.wclass for row, keep in zip(rows, mask) if keep)


def _percent(part: int, whole: int) -> float:
    # zero denominators report 0 rather than NaN
    return 100.0 * part / whole if whole else 0.0
