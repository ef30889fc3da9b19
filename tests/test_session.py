from pathlib import Path

from tagtext.config import TagTextConfig
from tagtext.hyphenation import VowelGroupHyphenator
from tagtext.session import AnalysisSession, process_corpus, process_document
from tests.utils import SAMPLE_TRIPLES, fox_triples

SEMICOLON_TRIPLES = [("Wait", "VV", "wait"), (";", ":", ";"), ("go", "VV", "go")]


def test_session_retags_default_sentence_end_tokens():
    session = AnalysisSession()
    doc = session.ingest(SEMICOLON_TRIPLES)

    assert doc.table[1].tag == "SENT"
    assert doc.table[2].sentence_index == 2


def test_sentence_end_retagging_can_be_disabled():
    session = AnalysisSession(TagTextConfig(apply_sentence_end=False))
    doc = session.ingest(SEMICOLON_TRIPLES)

    assert doc.table[1].tag == ":"
    assert doc.table[2].sentence_index == 1


def test_configured_stopwords_and_stemmer():
    session = AnalysisSession(
        TagTextConfig(stopwords=["the"]), stemmer=lambda token: token.lower()
    )
    doc = session.ingest(fox_triples())

    assert [row.index for row in doc.table if row.stopword] == [0, 6]
    assert doc.table[1].stem == "quick"


def test_language_packs_from_config(tmp_path: Path):
    pack = tmp_path / "zz.yaml"
    pack.write_text(
        "language: zz\n"
        "word_tags:\n  W: [word, Word]\n"
        "sentence_end_tags:\n  E: [fullstop, End]\n",
        encoding="utf-8",
    )
    session = AnalysisSession(TagTextConfig(language="zz", language_packs=[str(pack)]))

    doc = session.ingest([("Hallo", "W", "hallo"), (".", "E", ".")])

    assert doc.language == "zz"
    assert [row.wclass for row in doc.table] == ["word", "fullstop"]


def test_cloze_uses_configured_defaults():
    session = AnalysisSession(TagTextConfig(cloze_period=2, cloze_offset=1, cloze_blank_char="#"))
    doc = session.ingest(fox_triples(), doc_id="fox")

    clozed = session.cloze(doc, blank_width=1)

    assert clozed is not None
    assert clozed.active_transform.changed_positions == [2, 4, 6, 8]
    assert set(clozed.table.tokens[i] for i in (2, 4, 6, 8)) == {"#"}


def test_process_corpus_shares_hyphenation_cache():
    session = AnalysisSession(hyphenator=VowelGroupHyphenator())
    results = process_corpus(session, {"fox": fox_triples(), "sample": SAMPLE_TRIPLES})

    assert list(results) == ["fox", "sample"]
    document, hyphenation = results["fox"]
    assert document.doc_id == "fox"
    assert hyphenation.total_syllables == 13
    assert len(session.hyphen_cache) == 9

    _, again = process_document(session, fox_triples(), "fox-again")
    assert again.total_syllables == 13
    assert session.hyphen_cache.hits == 6
