from __future__ import annotations

import hashlib
import logging
from dataclasses import replace
from typing import Callable, Iterable, Sequence, Tuple, cast

from .classification import LanguageRegistry, LanguageTags, WordClass
from .errors import ConfigurationError, InvalidArgument
from .models import TaggedDocument, TokenRecord, TokenTable
from .textutils import count_letters

LOGGER = logging.getLogger(__name__)

RawTriple = Tuple[str, str, str]
Stemmer = Callable[[str], str]


def ingest(
    triples: Iterable[Sequence[str]],
    language: str,
    registry: LanguageRegistry,
    doc_id: str | None = None,
    *,
    sentence_end_tokens: Iterable[str] | None = None,
    stopwords: Iterable[str] | None = None,
    stemmer: Stemmer | None = None,
) -> TaggedDocument:
    """
    Turn a raw ``(token, tag, lemma)`` stream into a tagged document.

    Parameters
    ----------
    triples:
        Tagger output in document order.
    language:
        Code of a language registered in ``registry``.
    doc_id:
        Document name. Derived from the content when omitted.
    sentence_end_tokens:
        Tokens that are retagged as sentence endings before classification.
    stopwords:
        Words flagged as stopwords (compared in lower case).
    stemmer:
        Callable returning the stem of a token.
    """
    tags = registry.get(language)
    raw = _validate_triples(triples)
    if sentence_end_tokens is not None:
        raw = apply_sentence_end(raw, tags, sentence_end_tokens)
    if doc_id is None:
        doc_id = generate_doc_id(raw, language)
    rows = _classify(raw, tags, doc_id)
    rows = stop_and_stem(rows, stopwords=stopwords, stemmer=stemmer)
    if not rows:
        LOGGER.warning("Document %s contains no tokens.", doc_id)
    table = TokenTable(tuple(rows))
    return TaggedDocument(
        doc_id=doc_id,
        language=language,
        tags=tags,
        table=table,
        original_table=table,
    )


def generate_doc_id(triples: Sequence[RawTriple], language: str) -> str:
    """Deterministic document name so repeated ingestion yields equal documents."""
    digest = hashlib.sha1(language.encode("utf-8"))
    for token, tag, lemma in triples:
        digest.update("\x1f".join((token, tag, lemma)).encode("utf-8"))
        digest.update(b"\x1e")
    return f"doc_{digest.hexdigest()[:10]}"


def apply_sentence_end(
    triples: Sequence[RawTriple], tags: LanguageTags, sentence_end_tokens: Iterable[str]
) -> list[RawTriple]:
    """Retag tokens listed in ``sentence_end_tokens`` with the sentence ending tag."""
    enders = set(sentence_end_tokens)
    end_tag = tags.primary_sentence_end_tag
    return [
        (token, end_tag if token in enders else tag, lemma)
        for token, tag, lemma in triples
    ]


def stop_and_stem(
    rows: Sequence[TokenRecord],
    stopwords: Iterable[str] | None = None,
    stemmer: Stemmer | None = None,
    lowercase: bool = True,
) -> list[TokenRecord]:
    """Annotate rows with stopword flags and stems."""
    if stopwords is None and stemmer is None:
        return list(rows)
    if lowercase:
        stop_set = {word.lower() for word in stopwords or ()}
    else:
        stop_set = set(stopwords or ())
    annotated: list[TokenRecord] = []
    for row in rows:
        key = row.token.lower() if lowercase else row.token
        stem = stemmer(row.token) if stemmer is not None else row.stem
        annotated.append(replace(row, stopword=key in stop_set, stem=stem))
    return annotated


def _validate_triples(triples: Iterable[Sequence[str]]) -> list[RawTriple]:
    raw: list[RawTriple] = []
    for position, triple in enumerate(triples):
        if len(triple) != 3:
            raise InvalidArgument(
                f"Row {position} must hold token, tag and lemma, got {len(triple)} values."
            )
        token, tag, lemma = triple
        raw.append((str(token), str(tag), str(lemma)))
    return raw


def _classify(
    triples: Sequence[RawTriple], tags: LanguageTags, doc_id: str
) -> list[TokenRecord]:
    unknown = sorted({tag for _, tag, _ in triples if tags.classify(tag) is None})
    if unknown:
        raise ConfigurationError(
            f"Unknown tag(s) for language {tags.code!r}: {', '.join(unknown)}"
        )

    rows: list[TokenRecord] = []
    sentence = 1
    for position, (token, tag, lemma) in enumerate(triples):
        word_class = cast(WordClass, tags.classify(tag))
        sentence_end = tags.is_sentence_end_tag(tag)
        rows.append(
            TokenRecord(
                index=position,
                token=token,
                tag=tag,
                lemma=lemma,
                wclass=word_class.wclass,
                description=word_class.description,
                letters=count_letters(token),
                sentence_index=sentence,
                doc_id=doc_id,
                is_sentence_end=sentence_end,
            )
        )
        if sentence_end:
            sentence += 1
    return rows
