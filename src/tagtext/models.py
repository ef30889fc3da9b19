from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import TYPE_CHECKING, Iterator, Sequence, Tuple

import pandas as pd

from .errors import InvalidArgument

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .classification import LanguageTags

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """A single tagged token together with its derived features."""

    index: int
    token: str
    tag: str
    lemma: str
    wclass: str
    description: str
    letters: int
    sentence_index: int
    doc_id: str
    is_sentence_end: bool = False
    stopword: bool = False
    stem: str | None = None


TOKEN_COLUMNS = [item.name for item in fields(TokenRecord)]


@dataclass(frozen=True, slots=True)
class TokenTable:
    """Ordered, immutable rows of a tagged document."""

    rows: Tuple[TokenRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[TokenRecord]:
        return iter(self.rows)

    def __getitem__(self, position: int) -> TokenRecord:
        return self.rows[position]

    @property
    def tokens(self) -> list[str]:
        return [row.token for row in self.rows]

    @property
    def tags(self) -> list[str]:
        return [row.tag for row in self.rows]

    def with_tokens(self, new_tokens: Sequence[str]) -> TokenTable:
        """Return a copy of the table whose token texts are replaced row by row."""
        if len(new_tokens) != len(self.rows):
            raise InvalidArgument(
                f"Expected {len(self.rows)} tokens, got {len(new_tokens)}."
            )
        return TokenTable(
            tuple(
                row if row.token == token else replace(row, token=token)
                for row, token in zip(self.rows, new_tokens)
            )
        )

    def to_frame(self) -> pd.DataFrame:
        """Serialize the rows as a row-oriented DataFrame."""
        return pd.DataFrame([asdict(row) for row in self.rows], columns=TOKEN_COLUMNS)


@dataclass(frozen=True, slots=True)
class TransformRecord:
    """Outcome of one named transformation applied to a document."""

    name: str
    equality_mask: Tuple[bool, ...]

    @property
    def changed_positions(self) -> list[int]:
        return [idx for idx, equal in enumerate(self.equality_mask) if not equal]


@dataclass(frozen=True, slots=True)
class TaggedDocument:
    """A tagged document, its original tokens and the transformations applied."""

    doc_id: str
    language: str
    tags: "LanguageTags"
    table: TokenTable
    original_table: TokenTable
    transforms: Tuple[TransformRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.table)

    @property
    def active_transform(self) -> TransformRecord | None:
        """The most recently applied transformation, if any."""
        return self.transforms[-1] if self.transforms else None

    @property
    def transform_names(self) -> list[str]:
        return [record.name for record in self.transforms]

    def find_transform(self, name: str) -> TransformRecord | None:
        """
        Return the record stored under ``name`` or None.

        When the name was recorded more than once, the last occurrence wins.
        """
        matches = [record for record in self.transforms if record.name == name]
        if not matches:
            return None
        if len(matches) > 1:
            LOGGER.warning(
                "Transformation %r found %d times, using last occurrence only.",
                name,
                len(matches),
            )
        return matches[-1]

    def with_transform(
        self, table: TokenTable, record: TransformRecord, *, replace_existing: bool = False
    ) -> TaggedDocument:
        """Return a new document carrying ``table`` and ``record`` as active state."""
        if len(table) != len(self.table) or len(record.equality_mask) != len(self.table):
            raise InvalidArgument(
                "Transformed table and equality mask must keep the document length."
            )
        previous = self.transforms
        if replace_existing:
            previous = tuple(item for item in previous if item.name != record.name)
        return replace(self, table=table, transforms=previous + (record,))
