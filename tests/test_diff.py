import logging

import pytest

from tagtext.diff import ALL_CHANGED, apply_transform, changed_rows, diff, original_text
from tagtext.errors import InvalidArgument, NotFound
from tagtext.transforms import cloze_delete, text_transform
from tests.utils import FOX_TOKENS, fox_document


def _normalized_then_clozed():
    doc = fox_document()
    normalized = text_transform(doc, "normalize", query={"FOX": "cat"})
    clozed = cloze_delete(normalized, period=5, offset=0, blank_width=0)
    assert clozed is not None
    return clozed


def test_diff_defaults_to_active_transform():
    doc = _normalized_then_clozed()
    selected = diff(doc)

    assert [idx for idx, flag in enumerate(selected) if flag] == [4, 9]
    assert doc.transform_names == ["textTransform", "clozeDelete"]


def test_diff_by_name_and_all_changed():
    doc = _normalized_then_clozed()

    assert [idx for idx, flag in enumerate(diff(doc, "textTransform")) if flag] == [3]
    assert [idx for idx, flag in enumerate(diff(doc, ALL_CHANGED)) if flag] == [3, 4, 9]


def test_diff_without_transform_is_not_found():
    with pytest.raises(NotFound):
        diff(fox_document())


def test_unknown_transform_name_is_not_found():
    doc = _normalized_then_clozed()
    with pytest.raises(NotFound, match="missing"):
        diff(doc, "missing")
    assert doc.find_transform("missing") is None


def test_explicit_mask_is_validated():
    doc = fox_document()
    mask = [False] * len(FOX_TOKENS)
    mask[0] = True

    assert diff(doc, mask) == mask
    with pytest.raises(InvalidArgument):
        diff(doc, [True, False])


def test_duplicate_names_use_last_and_warn(caplog: pytest.LogCaptureFixture):
    doc = fox_document()
    once = cloze_delete(doc, period=5, offset=0)
    twice = cloze_delete(once, period=3, offset=0)
    assert twice is not None

    with caplog.at_level(logging.WARNING, logger="tagtext.models"):
        selected = diff(twice, "clozeDelete")

    assert "found 2 times" in caplog.text
    assert selected == diff(twice)


def test_replace_drops_earlier_record_of_same_name():
    doc = fox_document()
    first = apply_transform(doc, [t.upper() for t in FOX_TOKENS], "case")
    second = apply_transform(first, [t.lower() for t in FOX_TOKENS], "case", replace=True)

    assert second.transform_names == ["case"]
    # compared with the uppercased tokens every row changed
    assert all(diff(second, "case"))


def test_apply_transform_requires_same_length():
    with pytest.raises(InvalidArgument):
        apply_transform(fox_document(), ["only", "two"], "short")


def test_original_text_and_changed_rows():
    doc = _normalized_then_clozed()
    frame = original_text(doc)

    assert list(frame["token"]) == FOX_TOKENS
    assert list(frame.index[~frame["equal"]]) == [3, 4, 9]

    changed = changed_rows(doc, ALL_CHANGED)
    assert list(changed["original"]) == ["fox", "jumps", "again"]
    assert list(changed["token"]) == ["cat", "_____", "_____"]


def test_text_transform_schemes():
    doc = fox_document()

    assert text_transform(doc, "upper").table.tokens[0] == "THE"
    assert text_transform(doc, "lower").table.tokens[0] == "the"
    assert text_transform(doc, "capitalize").table.tokens[1] == "Quick"
    with pytest.raises(InvalidArgument):
        text_transform(doc, "reverse")
    with pytest.raises(InvalidArgument):
        text_transform(doc, "normalize")
