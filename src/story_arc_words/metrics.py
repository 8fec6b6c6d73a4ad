from __future__ import annotations

import logging
from typing import Mapping, Tuple

import numpy as np
import pandas as pd

from .lexicon import lexicon_frame
from .models import DECILES, PositionalStats

UNIFORM_FRACTION = 0.10
PEAK_COLUMNS = [
    "word",
    "count",
    "peak_decile",
    "fraction_peak",
    "over_representation",
]

LOGGER = logging.getLogger(__name__)


def edge_words(
    word_stats: pd.DataFrame, top_k: int, threshold: int | None = None
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Return the words shifted furthest toward the beginning and the end.

    Rows are ordered by ascending ``median_position`` (earliest first). The
    beginning table is the first ``top_k`` rows in that order; the ending
    table is the last ``top_k`` rows with the latest word first.
    """
    if top_k < 0:
        raise ValueError("top_k must not be negative.")
    frame = word_stats
    if threshold is not None:
        frame = frame[frame["count"] >= threshold]
    ordered = frame.sort_values(
        ["median_position", "word"], kind="mergesort"
    ).reset_index(drop=True)
    beginning = ordered.head(top_k).reset_index(drop=True)
    ending = ordered.tail(top_k).iloc[::-1].reset_index(drop=True)
    return beginning, ending


def peak_deciles(stats: PositionalStats) -> pd.DataFrame:
    """
    Find the decile holding the largest share of each word's occurrences.

    Ties go to the earlier decile. ``over_representation`` is the peak share
    minus the 10% a uniformly spread word would have.
    """
    if stats.word_stats.empty:
        return pd.DataFrame(
            {
                "word": pd.Series([], dtype=object),
                "count": pd.Series([], dtype=np.int64),
                "peak_decile": pd.Series([], dtype=np.float64),
                "fraction_peak": pd.Series([], dtype=np.float64),
                "over_representation": pd.Series([], dtype=np.float64),
            }
        )

    wide = stats.decile_counts.pivot(index="word", columns="decile", values="count")
    wide = wide.reindex(columns=list(DECILES), fill_value=0)
    counts = stats.word_stats.set_index("word")["count"].reindex(wide.index)

    peaks = pd.DataFrame(
        {
            "word": wide.index,
            "count": counts.to_numpy(),
            "peak_decile": wide.idxmax(axis=1).to_numpy(dtype=np.float64),
            "fraction_peak": (wide.max(axis=1) / counts).to_numpy(dtype=np.float64),
        }
    )
    peaks["over_representation"] = peaks["fraction_peak"] - UNIFORM_FRACTION
    peaks = peaks.sort_values(
        ["peak_decile", "over_representation", "word"],
        ascending=[True, False, True],
        kind="mergesort",
    ).reset_index(drop=True)
    return peaks[PEAK_COLUMNS]


def top_peak_words(peaks: pd.DataFrame, per_decile: int) -> pd.DataFrame:
    """Keep the ``per_decile`` most over-represented words of each decile."""
    if per_decile < 0:
        raise ValueError("per_decile must not be negative.")
    ordered = peaks.sort_values(
        ["peak_decile", "over_representation", "word"],
        ascending=[True, False, True],
        kind="mergesort",
    )
    return ordered.groupby("peak_decile", sort=True).head(per_decile).reset_index(
        drop=True
    )


def sentiment_by_decile(
    decile_counts: pd.DataFrame,
    lexicon: Mapping[str, int],
    min_coverage: int = 1,
) -> pd.DataFrame:
    """
    Occurrence-weighted mean lexicon score for each decile.

    Only words present in the lexicon contribute. A decile with fewer than
    ``min_coverage`` matched occurrences reports NaN rather than 0, since 0
    reads as neutral sentiment.
    """
    if min_coverage < 1:
        raise ValueError("min_coverage must be at least 1.")
    joined = decile_counts.merge(lexicon_frame(lexicon), on="word", how="inner")
    joined["weighted"] = joined["score"] * joined["count"]
    totals = (
        joined.groupby("decile")[["weighted", "count"]]
        .sum()
        .reindex(list(DECILES), fill_value=0)
    )
    coverage = totals["count"].astype(np.int64)
    sentiment = totals["weighted"].div(coverage.where(coverage >= min_coverage))
    missing = int(sentiment.isna().sum())
    if missing:
        LOGGER.info(
            "%d deciles have fewer than %d lexicon matches; reporting NaN.",
            missing,
            min_coverage,
        )
    return pd.DataFrame(
        {
            "decile": list(DECILES),
            "sentiment": sentiment.to_numpy(dtype=np.float64),
            "coverage": coverage.to_numpy(),
        }
    )
