import math
from pathlib import Path

import pytest

from tagtext.frequency import build_frequency_table, load_frequency_table, write_frequency_table
from tests.utils import fox_document, sample_document


def test_build_counts_word_tokens_only():
    table = build_frequency_table([fox_document(), sample_document()])

    assert table.lookup(".") is None
    assert table.lookup(",") is None
    the = table.lookup("the")
    assert the is not None
    assert the.frequency == 3
    assert the.rank == 1
    assert the.idf is None


def test_case_sensitive_lookup_and_idf():
    table = build_frequency_table([fox_document(), sample_document()])

    upper = table.lookup("The", case_sensitive=True)
    lower = table.lookup("the", case_sensitive=True)
    assert upper is not None and lower is not None
    assert upper.frequency == 2
    assert upper.doc_frequency == 2
    assert upper.idf == pytest.approx(0.0)
    assert lower.idf == pytest.approx(math.log(2))
    assert table.lookup("THE", case_sensitive=True) is None


def test_per_million_and_pct():
    table = build_frequency_table([fox_document()])
    fox = table.lookup("fox")

    assert fox is not None
    assert fox.pct == pytest.approx(10.0)
    assert fox.per_million == pytest.approx(100_000.0)


def test_written_table_loads_back(tmp_path: Path):
    table = build_frequency_table([fox_document(), sample_document()])
    path = tmp_path / "freq" / "corpus.tsv"

    write_frequency_table(table, path)
    loaded = load_frequency_table(path)

    assert len(loaded) == len(table)
    cat = loaded.lookup("cat", case_sensitive=True)
    assert cat is not None
    original = table.lookup("cat", case_sensitive=True)
    assert original is not None
    assert (cat.frequency, cat.rank, cat.doc_frequency) == (1, original.rank, 1)
    assert cat.idf == pytest.approx(math.log(2))
    assert loaded.lookup("the").frequency == 3


def test_missing_table_is_empty(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    table = load_frequency_table(tmp_path / "missing.tsv")

    assert len(table) == 0
    assert table.lookup("anything") is None
    assert "does not exist" in caplog.text
