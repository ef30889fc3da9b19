from __future__ import annotations

from tagtext.classification import LanguageRegistry
from tagtext.ingestion import ingest
from tagtext.models import TaggedDocument
from tagtext.tagsets import build_default_registry

FOX_TOKENS = ["The", "quick", "brown", "fox", "jumps", "over", "the", "lazy", "dog", "again"]
FOX_TAGS = ["DT", "JJ", "JJ", "NN", "VVZ", "IN", "DT", "JJ", "NN", "RB"]

SAMPLE_TRIPLES = [
    ("The", "DT", "the"),
    ("cat", "NN", "cat"),
    ("sat", "VVD", "sit"),
    (".", "SENT", "."),
    ("Dogs", "NNS", "dog"),
    (",", ",", ","),
    ("cats", "NNS", "cat"),
    ("and", "CC", "and"),
    ("birds", "NNS", "bird"),
    ("ran", "VVD", "run"),
    ("!", "SENT", "!"),
]


def fox_triples() -> list[tuple[str, str, str]]:
    return [(token, tag, token.lower()) for token, tag in zip(FOX_TOKENS, FOX_TAGS)]


def fox_document(registry: LanguageRegistry | None = None) -> TaggedDocument:
    return ingest(fox_triples(), "en", registry or build_default_registry(), "fox")


def sample_document(registry: LanguageRegistry | None = None) -> TaggedDocument:
    return ingest(SAMPLE_TRIPLES, "en", registry or build_default_registry(), "sample")


def toy_registry() -> LanguageRegistry:
    """A minimal language with one tag per word class."""
    registry = LanguageRegistry()
    registry.register(
        "xx",
        word_tags={"N": ("noun", "Noun"), "V": ("verb", "Verb"), "D": ("determiner", "Det")},
        punctuation_tags={"P": ("punctuation", "Mark")},
        sentence_end_tags={"S": ("punctuation", "Sentence end")},
    )
    return registry


def toy_document() -> TaggedDocument:
    """Three nouns, two verbs, two determiners and three punctuation rows."""
    triples = [
        ("The", "D", "the"),
        ("dog", "N", "dog"),
        ("barks", "V", "bark"),
        (",", "P", ","),
        ("the", "D", "the"),
        ("cat", "N", "cat"),
        ("mice", "N", "mouse"),
        ("run", "V", "run"),
        (";", "P", ";"),
        (".", "S", "."),
    ]
    return ingest(triples, "xx", toy_registry(), "toy")
