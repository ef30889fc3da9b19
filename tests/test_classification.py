import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from tagtext.classification import LanguageRegistry, LanguageTags, WordClass, load_language_pack
from tagtext.errors import ConfigurationError
from tagtext.tagsets import build_default_registry, en


def test_english_tags_classify_words_and_punctuation():
    tags = build_default_registry().get("en")

    assert tags.classify("NN") == WordClass("noun", "Noun, singular or mass")
    assert tags.is_word_tag("VVZ")
    assert not tags.is_word_tag(",")
    assert tags.is_punctuation_tag("SENT")
    assert tags.primary_sentence_end_tag == "SENT"
    assert "noun" in tags.word_classes
    assert tags.non_word_classes == {"comma", "punctuation", "fullstop"}
    assert tags.classify("???") is None


def test_registry_loads_lazily_once():
    calls = []

    def loader() -> LanguageTags:
        calls.append("en")
        return en.build_tags()

    registry = LanguageRegistry()
    registry.register_loader("en", loader)
    assert "en" in registry
    assert calls == []

    first = registry.get("en")
    second = registry.get("en")
    assert first is second
    assert calls == ["en"]


def test_registry_rejects_unknown_language():
    registry = LanguageRegistry()
    with pytest.raises(ConfigurationError, match="not registered"):
        registry.get("fr")


def test_register_accepts_strings_and_pairs():
    registry = LanguageRegistry()
    tags = registry.register(
        "xx",
        word_tags={"N": "noun", "V": ("verb", "A verb")},
        punctuation_tags=None,
        sentence_end_tags={"S": WordClass("fullstop")},
    )

    assert registry.get("xx") is tags
    assert tags.classify("N") == WordClass("noun", "")
    assert tags.classify("V").description == "A verb"
    assert registry.languages() == ["xx"]


def test_missing_tables_are_configuration_errors():
    registry = LanguageRegistry()
    with pytest.raises(ConfigurationError):
        registry.register("xx", word_tags={}, punctuation_tags=None, sentence_end_tags={"S": "x"})
    with pytest.raises(ConfigurationError):
        registry.register("xx", word_tags={"N": "noun"}, punctuation_tags=None, sentence_end_tags={})


def test_load_language_pack_from_yaml(tmp_path: Path):
    pack = tmp_path / "de.yaml"
    pack.write_text(
        "language: de\n"
        "word_tags:\n"
        "  NN: [noun, Normales Nomen]\n"
        "  VVFIN: [verb, Finites Verb]\n"
        "punctuation_tags:\n"
        "  '$,': [comma, Komma]\n"
        "sentence_end_tags:\n"
        "  '$.': [fullstop, Satzende]\n",
        encoding="utf-8",
    )

    tags = load_language_pack(pack)

    assert tags.code == "de"
    assert tags.classify("VVFIN") == WordClass("verb", "Finites Verb")
    assert tags.primary_sentence_end_tag == "$."


def test_language_pack_without_word_tags_fails(tmp_path: Path):
    pack = tmp_path / "broken.yaml"
    pack.write_text("language: xx\nsentence_end_tags:\n  S: fullstop\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="word_tags"):
        load_language_pack(pack)


def test_failed_loader_stays_registered():
    attempts = []

    def flaky_loader() -> LanguageTags:
        attempts.append("en")
        if len(attempts) == 1:
            raise OSError("tag table unavailable")
        return en.build_tags()

    registry = LanguageRegistry()
    registry.register_loader("en", flaky_loader)

    with pytest.raises(OSError):
        registry.get("en")
    assert "en" in registry
    assert registry.get("en").code == "en"
    assert len(attempts) == 2


def test_loader_for_wrong_language_is_rejected():
    registry = LanguageRegistry()
    registry.register_loader("de", en.build_tags)

    with pytest.raises(ConfigurationError, match="returned tag set"):
        registry.get("de")
    assert registry.languages() == ["de"]


def test_concurrent_get_runs_loader_once():
    calls = []

    def slow_loader() -> LanguageTags:
        calls.append("en")
        time.sleep(0.01)
        return en.build_tags()

    registry = LanguageRegistry()
    registry.register_loader("en", slow_loader)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: registry.get("en"), range(32)))

    assert calls == ["en"]
    assert all(tags is results[0] for tags in results)


def test_tag_tables_are_read_only():
    tags = build_default_registry().get("en")

    with pytest.raises(TypeError):
        tags.word_tags["XX"] = WordClass("noun")  # type: ignore[index]
    source = {"N": "noun"}
    own = LanguageTags.from_tables("xx", source, None, {"S": "fullstop"})
    source["V"] = "verb"
    assert not own.is_word_tag("V")
