from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

import yaml

from .errors import ConfigurationError

DEFAULT_SENTENCE_END_TOKENS = [".", "!", "?", ";", ":"]


@dataclass(slots=True)
class TagTextConfig:
    """Configuration options for ingestion, transformations and hyphenation."""

    language: str = "en"
    apply_sentence_end: bool = True
    sentence_end_tokens: List[str] = field(
        default_factory=lambda: list(DEFAULT_SENTENCE_END_TOKENS)
    )
    stopwords: List[str] = field(default_factory=list)
    cloze_period: int = 5
    cloze_offset: int = 0
    cloze_blank_char: str = "_"
    cloze_blank_width: int = 10
    hyphen_min_length: int = 4
    hyphen_rm_hyph: bool = True
    language_packs: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.language:
            raise ConfigurationError("language must not be empty.")
        _require_int("cloze_period", self.cloze_period, minimum=1)
        _require_int("cloze_offset", self.cloze_offset, minimum=0)
        if self.cloze_offset >= self.cloze_period:
            raise ConfigurationError(
                f"cloze_offset must be below cloze_period ({self.cloze_period}), "
                f"got {self.cloze_offset}."
            )
        if not isinstance(self.cloze_blank_char, str) or len(self.cloze_blank_char) != 1:
            raise ConfigurationError(
                f"cloze_blank_char must be a single character, got {self.cloze_blank_char!r}."
            )
        _require_int("cloze_blank_width", self.cloze_blank_width, minimum=0)
        _require_int("hyphen_min_length", self.hyphen_min_length, minimum=1)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _require_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{name} must be an integer >= {minimum}, got {value!r}.")


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {item.name for item in fields(TagTextConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    for key in ("sentence_end_tokens", "stopwords", "language_packs"):
        if key in kwargs and kwargs[key] is not None:
            kwargs[key] = [str(value) for value in kwargs[key]]
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> TagTextConfig:
    """Build a TagTextConfig from a dictionary-like input."""
    if data is None:
        return TagTextConfig()
    return TagTextConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> TagTextConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError(f"Configuration {path} must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> TagTextConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return TagTextConfig()
    return config_from_yaml(path)
