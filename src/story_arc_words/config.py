from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class ArcConfig:
    """Configuration options for the story-arc word pipeline."""

    plots_path: str = "data/wikiplots/plots"
    titles_path: str = "data/wikiplots/titles"
    lexicon_path: str | None = "data/lexicon/AFINN-en-165.txt"
    output_dir: str | None = None
    min_count: int = 2500
    top_k: int = 15
    sentiment_min_coverage: int = 1
    peak_words_per_decile: int = 5
    shard_size: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def validate(self) -> None:
        """Raise ValueError when a numeric parameter is out of range."""
        if self.min_count < 1:
            raise ValueError("min_count must be at least 1.")
        if self.top_k < 0:
            raise ValueError("top_k must not be negative.")
        if self.sentiment_min_coverage < 1:
            raise ValueError("sentiment_min_coverage must be at least 1.")
        if self.peak_words_per_decile < 0:
            raise ValueError("peak_words_per_decile must not be negative.")
        if self.shard_size is not None and self.shard_size < 1:
            raise ValueError("shard_size must be at least 1.")


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(ArcConfig)}
    return {key: data[key] for key in data if key in allowed}


def config_from_dict(data: Mapping[str, Any] | None) -> ArcConfig:
    """Build an ArcConfig from a dictionary-like input."""
    if data is None:
        return ArcConfig()
    return ArcConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> ArcConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ArcConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ArcConfig()
    return config_from_yaml(path)
