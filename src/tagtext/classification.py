from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, MutableMapping, Sequence, Union

import yaml

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WordClass:
    """Coarse word class and human readable description of a POS tag."""

    wclass: str
    description: str = ""


TagEntry = Union[WordClass, Sequence[str], str]
TagTable = Mapping[str, TagEntry]


def _coerce_entry(tag: str, entry: TagEntry) -> WordClass:
    if isinstance(entry, WordClass):
        return entry
    if isinstance(entry, str):
        return WordClass(wclass=entry)
    values = list(entry)
    if not values or len(values) > 2:
        raise ConfigurationError(
            f"Tag {tag!r} must map to a word class and an optional description."
        )
    return WordClass(wclass=str(values[0]), description=str(values[1]) if len(values) > 1 else "")


def _coerce_table(table: TagTable | None) -> Dict[str, WordClass]:
    if not table:
        return {}
    return {str(tag): _coerce_entry(str(tag), entry) for tag, entry in table.items()}


@dataclass(frozen=True, slots=True)
class LanguageTags:
    """Read-only classification index of a single language's tag set."""

    code: str
    word_tags: Mapping[str, WordClass]
    punctuation_tags: Mapping[str, WordClass] = field(default_factory=dict)
    sentence_end_tags: Mapping[str, WordClass] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("word_tags", "punctuation_tags", "sentence_end_tags"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        if not self.word_tags:
            raise ConfigurationError(f"Language {self.code!r} defines no word tags.")
        if not self.sentence_end_tags:
            raise ConfigurationError(
                f"Language {self.code!r} defines no sentence ending tags."
            )

    @classmethod
    def from_tables(
        cls,
        code: str,
        word_tags: TagTable,
        punctuation_tags: TagTable | None,
        sentence_end_tags: TagTable,
    ) -> LanguageTags:
        return cls(
            code=code,
            word_tags=_coerce_table(word_tags),
            punctuation_tags=_coerce_table(punctuation_tags),
            sentence_end_tags=_coerce_table(sentence_end_tags),
        )

    @property
    def primary_sentence_end_tag(self) -> str:
        """Tag assigned to tokens that are forced to end a sentence."""
        return next(iter(self.sentence_end_tags))

    @property
    def word_classes(self) -> set[str]:
        return {entry.wclass for entry in self.word_tags.values()}

    @property
    def non_word_classes(self) -> set[str]:
        classes = {entry.wclass for entry in self.punctuation_tags.values()}
        classes.update(entry.wclass for entry in self.sentence_end_tags.values())
        return classes - self.word_classes

    def classify(self, tag: str) -> WordClass | None:
        for table in (self.word_tags, self.punctuation_tags, self.sentence_end_tags):
            if tag in table:
                return table[tag]
        return None

    def is_word_tag(self, tag: str) -> bool:
        return tag in self.word_tags

    def is_sentence_end_tag(self, tag: str) -> bool:
        return tag in self.sentence_end_tags

    def is_punctuation_tag(self, tag: str) -> bool:
        return tag in self.punctuation_tags or tag in self.sentence_end_tags


class LanguageRegistry:
    """
    Process-local registry of classification indexes keyed by language code.

    Languages may be registered with ready tables or with a loader that is
    invoked the first time the language is requested. Entries are never
    invalidated for the lifetime of the registry.
    """

    def __init__(self) -> None:
        self._tags: Dict[str, LanguageTags] = {}
        self._loaders: Dict[str, Callable[[], LanguageTags]] = {}
        self._lock = threading.RLock()

    def register(
        self,
        code: str,
        word_tags: TagTable,
        punctuation_tags: TagTable | None,
        sentence_end_tags: TagTable,
    ) -> LanguageTags:
        """Register the tag tables of a language and return its index."""
        tags = LanguageTags.from_tables(code, word_tags, punctuation_tags, sentence_end_tags)
        return self.register_tags(tags)

    def register_tags(self, tags: LanguageTags) -> LanguageTags:
        with self._lock:
            if tags.code in self._tags:
                LOGGER.warning("Replacing registered tag set for language %r.", tags.code)
            self._tags[tags.code] = tags
            self._loaders.pop(tags.code, None)
        return tags

    def register_loader(self, code: str, loader: Callable[[], LanguageTags]) -> None:
        """Defer building a language's index until it is first requested."""
        with self._lock:
            if code not in self._tags:
                self._loaders[code] = loader

    def get(self, code: str) -> LanguageTags:
        with self._lock:
            tags = self._tags.get(code)
            if tags is not None:
                return tags
            loader = self._loaders.get(code)
            if loader is None:
                raise ConfigurationError(
                    f"Language {code!r} is not registered. Known: {sorted(self.languages())}"
                )
            tags = loader()
            if tags.code != code:
                raise ConfigurationError(
                    f"Loader for {code!r} returned tag set for {tags.code!r}."
                )
            LOGGER.info("Loaded tag set for language %r.", code)
            self._tags[code] = tags
            del self._loaders[code]
            return tags

    def languages(self) -> list[str]:
        with self._lock:
            return sorted(set(self._tags) | set(self._loaders))

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._tags or code in self._loaders


def language_tags_from_dict(data: Mapping[str, Any]) -> LanguageTags:
    """Build a LanguageTags index from a parsed language pack mapping."""
    code = data.get("language")
    if not isinstance(code, str) or not code:
        raise ConfigurationError("Language pack must name its 'language'.")
    for key in ("word_tags", "sentence_end_tags"):
        if not isinstance(data.get(key), Mapping):
            raise ConfigurationError(f"Language pack {code!r} is missing '{key}'.")
    punctuation = data.get("punctuation_tags") or {}
    if not isinstance(punctuation, Mapping):
        raise ConfigurationError(
            f"Language pack {code!r} has malformed 'punctuation_tags'."
        )
    return LanguageTags.from_tables(
        code, data["word_tags"], punctuation, data["sentence_end_tags"]
    )


def load_language_pack(path: str | Path) -> LanguageTags:
    """Load a language's tag tables from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ConfigurationError(f"Language pack {path} must define a mapping.")
    return language_tags_from_dict(parsed)
