"""
tagtext package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .classification import LanguageRegistry, LanguageTags, WordClass, load_language_pack
from .config import TagTextConfig, config_from_dict, config_from_yaml, load_config
from .diff import ALL_CHANGED, apply_transform, diff, original_text
from .errors import ConfigurationError, InvalidArgument, NotFound, TagTextError
from .hyphenation import (
    HyphenationCache,
    Hyphenator,
    VowelGroupHyphenator,
    correct_hyphenation,
    hyphen,
    hyphen_counts,
    hyphen_df,
)
from .ingestion import ingest
from .models import TaggedDocument, TokenRecord, TokenTable, TransformRecord
from .session import AnalysisSession
from .stats import describe, frequency_profile, summarize
from .transforms import cloze_delete, iter_cloze_variants, text_transform

__all__ = [
    "ALL_CHANGED",
    "AnalysisSession",
    "ConfigurationError",
    "HyphenationCache",
    "Hyphenator",
    "InvalidArgument",
    "LanguageRegistry",
    "LanguageTags",
    "NotFound",
    "TagTextConfig",
    "TagTextError",
    "TaggedDocument",
    "TokenRecord",
    "TokenTable",
    "TransformRecord",
    "VowelGroupHyphenator",
    "WordClass",
    "apply_transform",
    "cloze_delete",
    "config_from_dict",
    "config_from_yaml",
    "correct_hyphenation",
    "describe",
    "diff",
    "frequency_profile",
    "hyphen",
    "hyphen_counts",
    "hyphen_df",
    "ingest",
    "iter_cloze_variants",
    "load_config",
    "load_language_pack",
    "original_text",
    "summarize",
    "text_transform",
]

__version__ = "0.1.0"
