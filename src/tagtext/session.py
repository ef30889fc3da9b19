from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .classification import LanguageRegistry, load_language_pack
from .config import TagTextConfig
from .hyphenation import HyphenationCache, HyphenationResult, Hyphenator, VowelGroupHyphenator, hyphen
from .ingestion import Stemmer, ingest
from .models import TaggedDocument
from .tagsets import build_default_registry
from .transforms import Offset, cloze_delete

LOGGER = logging.getLogger(__name__)


class AnalysisSession:
    """
    Explicit owner of the state shared between documents of one session.

    The language registry and the hyphenation cache live as long as the
    session; documents stay independent of each other.
    """

    def __init__(
        self,
        config: TagTextConfig | None = None,
        registry: LanguageRegistry | None = None,
        hyphenator: Hyphenator | None = None,
        stemmer: Stemmer | None = None,
    ) -> None:
        self.config = config or TagTextConfig()
        self.registry = registry if registry is not None else build_default_registry()
        self.hyphen_cache = HyphenationCache()
        self.hyphenator = hyphenator or VowelGroupHyphenator()
        self.stemmer = stemmer
        for pack in self.config.language_packs:
            tags = load_language_pack(pack)
            self.registry.register_tags(tags)
            LOGGER.info("Registered language pack %s for %r.", pack, tags.code)

    def ingest(
        self,
        triples: Iterable[Sequence[str]],
        doc_id: str | None = None,
        language: str | None = None,
    ) -> TaggedDocument:
        """Ingest tagger output using the session's configuration."""
        cfg = self.config
        return ingest(
            triples,
            language or cfg.language,
            self.registry,
            doc_id,
            sentence_end_tokens=cfg.sentence_end_tokens if cfg.apply_sentence_end else None,
            stopwords=cfg.stopwords or None,
            stemmer=self.stemmer,
        )

    def cloze(
        self,
        document: TaggedDocument,
        period: int | None = None,
        offset: Offset | None = None,
        blank_char: str | None = None,
        blank_width: int | None = None,
    ) -> TaggedDocument | None:
        """Cloze deletion with unspecified parameters taken from the configuration."""
        cfg = self.config
        return cloze_delete(
            document,
            period=cfg.cloze_period if period is None else period,
            offset=cfg.cloze_offset if offset is None else offset,
            blank_char=cfg.cloze_blank_char if blank_char is None else blank_char,
            blank_width=cfg.cloze_blank_width if blank_width is None else blank_width,
        )

    def hyphen(self, document: TaggedDocument) -> HyphenationResult:
        return hyphen(
            document,
            self.hyphenator,
            self.hyphen_cache,
            min_length=self.config.hyphen_min_length,
            rm_hyph=self.config.hyphen_rm_hyph,
        )


def process_document(
    session: AnalysisSession,
    triples: Iterable[Sequence[str]],
    doc_id: str | None = None,
) -> Tuple[TaggedDocument, HyphenationResult]:
    """Ingest one document and hyphenate it."""
    document = session.ingest(triples, doc_id)
    return document, session.hyphen(document)


def process_corpus(
    session: AnalysisSession,
    corpus: Dict[str, List[Tuple[str, str, str]]],
) -> Dict[str, Tuple[TaggedDocument, HyphenationResult]]:
    """Process all documents and return the per-document outputs."""
    results: Dict[str, Tuple[TaggedDocument, HyphenationResult]] = {}
    for doc_id, triples in corpus.items():
        results[doc_id] = process_document(session, triples, doc_id)
    LOGGER.info(
        "Processed %d documents; hyphenation cache holds %d words.",
        len(results),
        len(session.hyphen_cache),
    )
    return results
