from __future__ import annotations

import logging
from typing import Sequence, Union

import pandas as pd

from .errors import InvalidArgument, NotFound
from .models import TaggedDocument, TransformRecord

LOGGER = logging.getLogger(__name__)

ALL_CHANGED = "all changed"

Selection = Union[None, str, Sequence[bool]]


def apply_transform(
    document: TaggedDocument,
    new_tokens: Sequence[str],
    name: str,
    *,
    replace: bool = False,
) -> TaggedDocument:
    """
    Record a transformation of ``document`` that produced ``new_tokens``.

    The equality mask compares the new tokens with the tokens the document held
    right before this transformation. With ``replace=True`` any earlier record
    of the same name is dropped instead of shadowed.
    """
    if not name:
        raise InvalidArgument("Transformations must be named.")
    new_tokens = list(new_tokens)
    table = document.table.with_tokens(new_tokens)
    mask = tuple(
        before == after for before, after in zip(document.table.tokens, new_tokens)
    )
    record = TransformRecord(name=name, equality_mask=mask)
    LOGGER.debug(
        "Transformation %s changed %d of %d tokens in %s.",
        name,
        mask.count(False),
        len(mask),
        document.doc_id,
    )
    return document.with_transform(table, record, replace_existing=replace)


def diff(document: TaggedDocument, index: Selection = None) -> list[bool]:
    """
    Return a selection mask over the document rows (True = selected).

    ``index`` may be None (rows changed by the active transformation),
    ``"all changed"`` (rows differing from the original tokens), the name of a
    recorded transformation, or an explicit boolean mask.
    """
    if index is None:
        record = document.active_transform
        if record is None:
            raise NotFound(f"No transformation recorded for {document.doc_id}.")
        return [not equal for equal in record.equality_mask]
    if isinstance(index, str):
        if index == ALL_CHANGED:
            return [
                original.token != current.token
                for original, current in zip(document.original_table, document.table)
            ]
        record = document.find_transform(index)
        if record is None:
            raise NotFound(
                f"Transformation data {index!r} not found in {document.doc_id}."
            )
        return [not equal for equal in record.equality_mask]
    mask = list(index)
    if len(mask) != len(document.table):
        raise InvalidArgument(
            f"Selection mask has {len(mask)} entries, document has {len(document.table)} rows."
        )
    return [bool(value) for value in mask]


def original_text(document: TaggedDocument) -> pd.DataFrame:
    """Original token rows with an ``equal`` column against the current tokens."""
    frame = document.original_table.to_frame()
    frame["equal"] = [
        original.token == current.token
        for original, current in zip(document.original_table, document.table)
    ]
    return frame


def changed_rows(document: TaggedDocument, index: Selection = None) -> pd.DataFrame:
    """Current rows selected by ``index`` together with their original token."""
    mask = diff(document, index)
    frame = document.table.to_frame()
    frame.insert(2, "original", document.original_table.tokens)
    return frame.loc[mask]
