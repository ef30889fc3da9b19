from pathlib import Path

import pytest

from tagtext.config import TagTextConfig, config_from_dict, config_from_yaml, load_config
from tagtext.errors import ConfigurationError


def test_defaults():
    cfg = load_config()

    assert cfg == TagTextConfig()
    assert cfg.sentence_end_tokens == [".", "!", "?", ";", ":"]
    assert cfg.cloze_period == 5
    assert cfg.cloze_blank_width == 10
    assert cfg.hyphen_min_length == 4


def test_config_from_dict_ignores_unknown_keys():
    cfg = config_from_dict({"language": "de", "stopwords": ["der", 1], "unknown": True})

    assert cfg.language == "de"
    assert cfg.stopwords == ["der", "1"]
    assert config_from_dict(None) == TagTextConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "cloze_period: 7\ncloze_blank_char: '*'\nsentence_end_tokens: ['.']\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.cloze_period == 7
    assert cfg.cloze_blank_char == "*"
    assert cfg.sentence_end_tokens == ["."]
    assert cfg.language == "en"


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert config_from_yaml(path) == TagTextConfig()


def test_yaml_must_be_mapping(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        config_from_yaml(path)


@pytest.mark.parametrize(
    "values",
    [
        {"cloze_period": 0},
        {"cloze_offset": -1},
        {"cloze_period": 3, "cloze_offset": 3},
        {"cloze_blank_char": "--"},
        {"cloze_blank_width": -1},
        {"hyphen_min_length": 0},
        {"cloze_period": True},
        {"language": ""},
    ],
)
def test_invalid_values_are_rejected(values):
    with pytest.raises(ConfigurationError):
        config_from_dict(values)


def test_invalid_yaml_values_are_rejected(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("cloze_period: 5\ncloze_offset: 5\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="cloze_offset"):
        load_config(path)
