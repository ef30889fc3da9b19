"""
English TreeTagger (Penn Treebank derived) tag set.
"""

from __future__ import annotations

from ..classification import LanguageRegistry, LanguageTags

LANGUAGE = "en"

WORD_TAGS = {
    "CC": ("conjunction", "Coordinating conjunction"),
    "CD": ("number", "Cardinal number"),
    "DT": ("determiner", "Determiner"),
    "EX": ("existential", "Existential there"),
    "FW": ("foreign", "Foreign word"),
    "IN": ("preposition", "Preposition or subordinating conjunction"),
    "IN/that": ("preposition", "Complementizer"),
    "JJ": ("adjective", "Adjective"),
    "JJR": ("adjective", "Adjective, comparative"),
    "JJS": ("adjective", "Adjective, superlative"),
    "LS": ("listmarker", "List item marker"),
    "MD": ("modal", "Modal"),
    "NN": ("noun", "Noun, singular or mass"),
    "NNS": ("noun", "Noun, plural"),
    "NP": ("name", "Proper noun, singular"),
    "NPS": ("name", "Proper noun, plural"),
    "PDT": ("predeterminer", "Predeterminer"),
    "POS": ("possesive", "Possessive ending"),
    "PP": ("pronoun", "Personal pronoun"),
    "PP$": ("pronoun", "Possessive pronoun"),
    "RB": ("adverb", "Adverb"),
    "RBR": ("adverb", "Adverb, comparative"),
    "RBS": ("adverb", "Adverb, superlative"),
    "RP": ("particle", "Particle"),
    "SYM": ("symbol", "Symbol"),
    "TO": ("to", "to"),
    "UH": ("interjection", "Interjection"),
    "VB": ("verb", "Verb be, base form"),
    "VBD": ("verb", "Verb be, past tense"),
    "VBG": ("verb", "Verb be, gerund or present participle"),
    "VBN": ("verb", "Verb be, past participle"),
    "VBP": ("verb", "Verb be, non-3rd person singular present"),
    "VBZ": ("verb", "Verb be, 3rd person singular present"),
    "VH": ("verb", "Verb have, base form"),
    "VHD": ("verb", "Verb have, past tense"),
    "VHG": ("verb", "Verb have, gerund or present participle"),
    "VHN": ("verb", "Verb have, past participle"),
    "VHP": ("verb", "Verb have, non-3rd person singular present"),
    "VHZ": ("verb", "Verb have, 3rd person singular present"),
    "VV": ("verb", "Verb, base form"),
    "VVD": ("verb", "Verb, past tense"),
    "VVG": ("verb", "Verb, gerund or present participle"),
    "VVN": ("verb", "Verb, past participle"),
    "VVP": ("verb", "Verb, non-3rd person singular present"),
    "VVZ": ("verb", "Verb, 3rd person singular present"),
    "WDT": ("determiner", "Wh-determiner"),
    "WP": ("pronoun", "Wh-pronoun"),
    "WP$": ("pronoun", "Possessive wh-pronoun"),
    "WRB": ("adverb", "Wh-adverb"),
}

PUNCTUATION_TAGS = {
    ",": ("comma", "Comma"),
    ":": ("punctuation", "General joiner"),
    "``": ("punctuation", "Opening quotation mark"),
    "''": ("punctuation", "Closing quotation mark"),
    "(": ("punctuation", "Opening bracket"),
    ")": ("punctuation", "Closing bracket"),
    "$": ("punctuation", "Currency symbol"),
    "#": ("punctuation", "Number sign"),
}

SENTENCE_END_TAGS = {
    "SENT": ("fullstop", "Sentence ending punctuation"),
}


def build_tags() -> LanguageTags:
    return LanguageTags.from_tables(LANGUAGE, WORD_TAGS, PUNCTUATION_TAGS, SENTENCE_END_TAGS)


def register(registry: LanguageRegistry) -> None:
    """Make the English tag set available to ``registry`` on first use."""
    registry.register_loader(LANGUAGE, build_tags)
