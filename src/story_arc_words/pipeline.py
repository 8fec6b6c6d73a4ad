from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from .aggregation import aggregate_positions, build_occurrences
from .config import ArcConfig
from .lexicon import load_lexicon
from .loader import load_corpus
from .metrics import edge_words, peak_deciles, sentiment_by_decile, top_peak_words
from .models import ArcReport, Story

REPORT_FILES = {
    "word_stats": "word_stats.csv",
    "decile_counts": "decile_counts.csv",
    "beginning_words": "beginning_words.csv",
    "ending_words": "ending_words.csv",
    "peak_deciles": "peak_deciles.csv",
    "top_peak_words": "top_peak_words.csv",
    "sentiment_by_decile": "sentiment_by_decile.csv",
}
SUMMARY_FILE = "summary.json"

LOGGER = logging.getLogger(__name__)


def analyze_stories(
    stories: Sequence[Story], lexicon: Mapping[str, int], config: ArcConfig
) -> ArcReport:
    """Run tokenization, aggregation and the derived metrics over loaded stories."""
    config.validate()
    occurrences = build_occurrences(stories, config.shard_size)
    stats = aggregate_positions(occurrences, config.min_count)

    beginning, ending = edge_words(stats.word_stats, config.top_k)
    peaks = peak_deciles(stats)
    return ArcReport(
        num_stories=len(stories),
        num_tokens=len(occurrences),
        stats=stats,
        beginning_words=beginning,
        ending_words=ending,
        peak_deciles=peaks,
        top_peak_words=top_peak_words(peaks, config.peak_words_per_decile),
        sentiment_curve=sentiment_by_decile(
            stats.decile_counts, lexicon, config.sentiment_min_coverage
        ),
    )


def run_pipeline(config: ArcConfig) -> ArcReport:
    """Load the configured corpus and lexicon, then analyze them."""
    config.validate()
    stories = load_corpus(config.plots_path, config.titles_path)
    if config.lexicon_path:
        lexicon = load_lexicon(config.lexicon_path)
    else:
        LOGGER.warning("No sentiment lexicon configured; sentiment curve will be empty.")
        lexicon = {}
    return analyze_stories(stories, lexicon, config)


def report_tables(report: ArcReport) -> Dict[str, pd.DataFrame]:
    """Map each report table to its name."""
    return {
        "word_stats": report.stats.word_stats,
        "decile_counts": report.stats.decile_counts,
        "beginning_words": report.beginning_words,
        "ending_words": report.ending_words,
        "peak_deciles": report.peak_deciles,
        "top_peak_words": report.top_peak_words,
        "sentiment_by_decile": report.sentiment_curve,
    }


def report_summary(report: ArcReport) -> Dict[str, Any]:
    """Create a JSON-serializable summary of a pipeline run."""
    return {
        "num_stories": report.num_stories,
        "num_tokens": report.num_tokens,
        "min_count": report.stats.threshold,
        "num_words": report.stats.num_words,
        "beginning_words": _records(report.beginning_words),
        "ending_words": _records(report.ending_words),
        "sentiment_by_decile": _records(report.sentiment_curve),
    }


def write_report(report: ArcReport, output_dir: str | Path) -> Dict[str, Path]:
    """Write every table as CSV plus a JSON summary and return their paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    for name, table in report_tables(report).items():
        dest = output_dir / REPORT_FILES[name]
        table.to_csv(dest, index=False)
        written[name] = dest

    summary_path = output_dir / SUMMARY_FILE
    summary_path.write_text(json.dumps(report_summary(report), indent=2), encoding="utf-8")
    written["summary"] = summary_path
    LOGGER.info("Wrote %d report files to %s", len(written), output_dir)
    return written


def _records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    for row in frame.to_dict(orient="records"):
        records.append({key: _json_value(value) for key, value in row.items()})
    return records


def _json_value(value: Any) -> Any:
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value
