from __future__ import annotations

import logging
import re
import threading
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, replace
from typing import Callable, Collection, Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from .errors import InvalidArgument
from .models import TaggedDocument

LOGGER = logging.getLogger(__name__)

VOWEL_GROUP_RE = re.compile(r"[aeiouyäöüàáâãåèéêëìíîïòóôõùúûæøœ]+", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class HyphenatedWord:
    """Hyphenation of a single word as returned by a Hyphenator."""

    word: str
    syllables: int
    hyphenated: str


class Hyphenator(ABC):
    """Abstract syllable hyphenation routine."""

    pattern_version: str = "unversioned"

    @abstractmethod
    def hyphenate(self, words: Sequence[str], patterns: str) -> List[HyphenatedWord]:
        """Return one HyphenatedWord per input word, in input order."""
        raise NotImplementedError


class VowelGroupHyphenator(Hyphenator):
    """
    Heuristic hyphenator splitting words between vowel groups.

    It ignores ``patterns`` and keeps the pipeline usable without a pattern
    based hyphenation library.
    """

    pattern_version = "vowel-groups-1"

    def hyphenate(self, words: Sequence[str], patterns: str) -> List[HyphenatedWord]:
        results: List[HyphenatedWord] = []
        for word in words:
            parts = split_syllables(word)
            results.append(
                HyphenatedWord(word=word, syllables=len(parts), hyphenated="-".join(parts))
            )
        return results


class CallableHyphenator(Hyphenator):
    """Adapt an arbitrary callable into the Hyphenator interface."""

    def __init__(
        self,
        func: Callable[[Sequence[str], str], Sequence[HyphenatedWord]],
        pattern_version: str = "callable",
    ) -> None:
        self._func = func
        self.pattern_version = pattern_version

    def hyphenate(self, words: Sequence[str], patterns: str) -> List[HyphenatedWord]:
        return list(self._func(words, patterns))


def split_syllables(word: str) -> List[str]:
    """Split a word into syllable-like parts at vowel group boundaries."""
    groups = [match.span() for match in VOWEL_GROUP_RE.finditer(word)]
    # silent final e
    if (
        len(groups) > 1
        and groups[-1] == (len(word) - 1, len(word))
        and word[-1:].lower() == "e"
        and word[-2:].lower() != "le"
    ):
        groups = groups[:-1]
    if len(groups) < 2:
        return [word]
    cuts: List[int] = []
    for (_, first_end), (second_start, _) in zip(groups, groups[1:]):
        cluster = second_start - first_end
        cuts.append(first_end if cluster <= 1 else first_end + 1)
    bounds = [0] + cuts + [len(word)]
    return [word[start:end] for start, end in zip(bounds, bounds[1:])]


class HyphenationCache:
    """
    Session-wide hyphenation results keyed by language, word and pattern version.

    ``hyphen`` stores entries under the hyphenator's version combined with the
    pattern set it was called with.

    Entries are inserted once and never evicted.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, str, str], HyphenatedWord] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, language: str, word: str, pattern_version: str) -> HyphenatedWord | None:
        with self._lock:
            entry = self._entries.get((language, word, pattern_version))
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def add(self, language: str, pattern_version: str, entry: HyphenatedWord) -> HyphenatedWord:
        """Store ``entry`` unless the key is already cached; return the cached value."""
        with self._lock:
            return self._entries.setdefault((language, entry.word, pattern_version), entry)


@dataclass(frozen=True, slots=True)
class HyphenationRow:
    index: int
    token: str
    word: str
    syllables: int
    hyphenated: str


@dataclass(frozen=True, slots=True)
class HyphenationResult:
    """Hyphenation of a document's eligible tokens, aligned by row position."""

    doc_id: str
    language: str
    pattern_version: str
    rows: Tuple[HyphenationRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def total_syllables(self) -> int:
        return sum(row.syllables for row in self.rows)

    def syllable_counts(self) -> List[int]:
        return [row.syllables for row in self.rows]

    def syllables_by_position(self, length: int) -> List[int | None]:
        """Syllable counts merged back into a list of ``length`` document rows."""
        merged: List[int | None] = [None] * length
        for row in self.rows:
            if row.index >= length:
                raise InvalidArgument(
                    f"Row {row.index} does not exist in a document of {length} rows."
                )
            merged[row.index] = row.syllables
        return merged

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(row) for row in self.rows],
            columns=["index", "token", "word", "syllables", "hyphenated"],
        )


def eligible_words(
    document: TaggedDocument,
    rm_hyph: bool = True,
    rm_classes: Collection[str] | None = None,
    rm_tags: Collection[str] = (),
) -> List[Tuple[int, str, str]]:
    """
    Rows to hyphenate as ``(index, token, word)``.

    By default every row with a word tag is kept. ``rm_classes`` replaces that
    default with an explicit list of word classes to drop; ``rm_tags`` drops
    rows by tag. With ``rm_hyph`` embedded hyphens are stripped from ``word``.
    """
    candidates: List[Tuple[int, str, str]] = []
    tags = document.tags
    for row in document.table:
        if rm_classes is None:
            if not tags.is_word_tag(row.tag):
                continue
        elif row.wclass in rm_classes:
            continue
        if row.tag in rm_tags:
            continue
        word = row.token.replace("-", "") if rm_hyph else row.token
        if not word:
            continue
        candidates.append((row.index, row.token, word))
    return candidates


def hyphen(
    document: TaggedDocument,
    hyphenator: Hyphenator,
    cache: HyphenationCache | None = None,
    *,
    min_length: int = 4,
    rm_hyph: bool = True,
    rm_classes: Collection[str] | None = None,
    rm_tags: Collection[str] = (),
    patterns: str | None = None,
) -> HyphenationResult:
    """
    Hyphenate the eligible words of a document.

    Words shorter than ``min_length`` count as one syllable and are not sent
    to ``hyphenator``. Everything else is answered from ``cache`` when
    possible; the rest is hyphenated in a single batch and cached.
    """
    if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 1:
        raise InvalidArgument(f"min_length must be a positive integer, got {min_length!r}.")
    candidates = eligible_words(document, rm_hyph=rm_hyph, rm_classes=rm_classes, rm_tags=rm_tags)
    version = hyphenator.pattern_version
    language = document.language
    pattern_set = patterns or language
    # cached entries are only valid for the pattern set that produced them
    cache_version = f"{version}:{pattern_set}"

    resolved: Dict[str, HyphenatedWord] = {}
    pending: List[str] = []
    for _, _, word in candidates:
        if len(word) < min_length or word in resolved or word in pending:
            continue
        cached = cache.get(language, word, cache_version) if cache is not None else None
        if cached is None:
            pending.append(word)
        else:
            resolved[word] = cached

    if pending:
        results = hyphenator.hyphenate(pending, pattern_set)
        if len(results) != len(pending):
            raise InvalidArgument(
                f"Hyphenator returned {len(results)} results for {len(pending)} words."
            )
        for word, entry in zip(pending, results):
            if entry.word != word:
                entry = replace(entry, word=word)
            if cache is not None:
                entry = cache.add(language, cache_version, entry)
            resolved[word] = entry
    LOGGER.debug(
        "Hyphenated %d words of %s (%d new).", len(resolved), document.doc_id, len(pending)
    )

    rows = []
    for index, token, word in candidates:
        entry = resolved.get(word)
        if entry is None:
            rows.append(HyphenationRow(index, token, word, 1, word))
        else:
            rows.append(HyphenationRow(index, token, word, entry.syllables, entry.hyphenated))
    return HyphenationResult(
        doc_id=document.doc_id,
        language=language,
        pattern_version=version,
        rows=tuple(rows),
    )


def hyphen_df(document: TaggedDocument, hyphenator: Hyphenator, **kwargs) -> pd.DataFrame:
    """Hyphenate and return only the result table."""
    return hyphen(document, hyphenator, **kwargs).to_frame()


def hyphen_counts(document: TaggedDocument, hyphenator: Hyphenator, **kwargs) -> List[int]:
    """Hyphenate and return only the syllable counts."""
    return hyphen(document, hyphenator, **kwargs).syllable_counts()


def correct_hyphenation(
    result: HyphenationResult, corrections: Mapping[str, str]
) -> HyphenationResult:
    """
    Apply manually corrected hyphenations and recount syllables.

    ``corrections`` maps a word to its hyphenated form, e.g. ``{"table": "ta-ble"}``.
    """
    for word, hyphenated in corrections.items():
        if hyphenated.replace("-", "").lower() != word.replace("-", "").lower():
            raise InvalidArgument(f"Correction {hyphenated!r} does not spell {word!r}.")
    rows = tuple(
        replace(
            row,
            hyphenated=corrections[row.word],
            syllables=corrections[row.word].count("-") + 1,
        )
        if row.word in corrections
        else row
        for row in result.rows
    )
    unused = set(corrections) - {row.word for row in result.rows}
    if unused:
        LOGGER.warning("Corrections for unknown words ignored: %s", ", ".join(sorted(unused)))
    return replace(result, rows=rows)
