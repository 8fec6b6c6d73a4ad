"""
story_arc_words package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .aggregation import aggregate_positions, compute_positional_stats
from .config import ArcConfig, config_from_dict, config_from_yaml, load_config
from .lexicon import load_lexicon
from .loader import MalformedCorpus, MalformedCorpusError, load_corpus
from .metrics import edge_words, peak_deciles, sentiment_by_decile
from .pipeline import analyze_stories, run_pipeline, write_report
from .tokenization import iter_tokens

__all__ = [
    "ArcConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "MalformedCorpus",
    "MalformedCorpusError",
    "load_corpus",
    "iter_tokens",
    "aggregate_positions",
    "compute_positional_stats",
    "load_lexicon",
    "edge_words",
    "peak_deciles",
    "sentiment_by_decile",
    "analyze_stories",
    "run_pipeline",
    "write_report",
]

__version__ = "0.1.0"
