"""
Per-word positional statistics over the token stream.

Medians cannot be derived from counts and sums, so every occurrence
position of every word is retained in memory as one row of the occurrence
frame. For the full WikiPlots corpus that is roughly 40 million rows and is
the dominant memory cost of the whole pipeline.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Iterable, Iterator, List

import numpy as np
import pandas as pd

from .models import DECILE_INDEXES, PositionalStats, Story, Token
from .tokenization import iter_tokens

OCCURRENCE_COLUMNS = ["word", "position", "decile_index"]
WORD_STAT_COLUMNS = ["word", "count", "median_position"]
DECILE_COUNT_COLUMNS = ["word", "decile", "count"]

LOGGER = logging.getLogger(__name__)


def occurrence_frame(tokens: Iterable[Token]) -> pd.DataFrame:
    """Collect one row per token: its word, normalized position and decile."""
    words: list[str] = []
    positions: list[float] = []
    deciles: list[int] = []
    for token in tokens:
        words.append(token.word)
        positions.append(token.normalized_position)
        deciles.append(token.decile_index)
    return pd.DataFrame(
        {
            "word": pd.Series(words, dtype=object),
            "position": np.asarray(positions, dtype=np.float64),
            "decile_index": np.asarray(deciles, dtype=np.int64),
        }
    )


def merge_occurrences(frames: Iterable[pd.DataFrame]) -> pd.DataFrame:
    """
    Merge per-shard occurrence frames by concatenation.

    Only raw positions are merged; medians are computed afterwards on the
    combined frame and never averaged across shards.
    """
    frames = [frame for frame in frames if not frame.empty]
    if not frames:
        return occurrence_frame([])
    return pd.concat(frames, ignore_index=True)


def sharded_occurrences(stories: Iterable[Story], shard_size: int) -> pd.DataFrame:
    """Tokenize stories in shards of ``shard_size`` and merge the results."""
    if shard_size < 1:
        raise ValueError("shard_size must be at least 1.")
    frames: List[pd.DataFrame] = []
    for shard_index, shard in enumerate(_iter_shards(stories, shard_size), start=1):
        frame = occurrence_frame(iter_tokens(shard))
        LOGGER.debug(
            "Shard %d: %d stories, %d tokens.", shard_index, len(shard), len(frame)
        )
        frames.append(frame)
    return merge_occurrences(frames)


def build_occurrences(
    stories: Iterable[Story], shard_size: int | None = None
) -> pd.DataFrame:
    """Build the occurrence frame in one pass, or in shards when shard_size is set."""
    if shard_size is None:
        return occurrence_frame(iter_tokens(stories))
    return sharded_occurrences(stories, shard_size)


def aggregate_positions(occurrences: pd.DataFrame, threshold: int) -> PositionalStats:
    """
    Compute count, median position and decile counts per word.

    Words occurring fewer than ``threshold`` times are left out of both
    tables. Decile counts include all ten deciles for every kept word, so
    they always sum to the word's count.
    """
    if threshold < 1:
        raise ValueError("threshold must be at least 1.")
    if occurrences.empty:
        return _empty_stats(threshold)

    grouped = occurrences.groupby("word", sort=True)["position"]
    word_stats = grouped.agg(count="size", median_position="median").reset_index()
    word_stats = word_stats[word_stats["count"] >= threshold].reset_index(drop=True)
    word_stats["count"] = word_stats["count"].astype(np.int64)
    LOGGER.info(
        "Aggregated %d tokens; %d of %d words occur at least %d times.",
        len(occurrences),
        len(word_stats),
        grouped.ngroups,
        threshold,
    )
    if word_stats.empty:
        return _empty_stats(threshold)

    kept = occurrences[occurrences["word"].isin(word_stats["word"])]
    full_index = pd.MultiIndex.from_product(
        [word_stats["word"], DECILE_INDEXES], names=["word", "decile_index"]
    )
    counts = (
        kept.groupby(["word", "decile_index"])
        .size()
        .reindex(full_index, fill_value=0)
        .astype(np.int64)
    )
    decile_counts = counts.rename("count").reset_index()
    decile_counts["decile"] = decile_counts["decile_index"] / 10
    return PositionalStats(
        word_stats=word_stats[WORD_STAT_COLUMNS],
        decile_counts=decile_counts[DECILE_COUNT_COLUMNS],
        threshold=threshold,
    )


def compute_positional_stats(
    stories: Iterable[Story], threshold: int, shard_size: int | None = None
) -> PositionalStats:
    """Tokenize stories and aggregate their word positions."""
    return aggregate_positions(build_occurrences(stories, shard_size), threshold)


def _iter_shards(stories: Iterable[Story], shard_size: int) -> Iterator[List[Story]]:
    iterator = iter(stories)
    while True:
        shard = list(islice(iterator, shard_size))
        if not shard:
            return
        yield shard


def _empty_stats(threshold: int) -> PositionalStats:
    word_stats = pd.DataFrame(
        {
            "word": pd.Series([], dtype=object),
            "count": pd.Series([], dtype=np.int64),
            "median_position": pd.Series([], dtype=np.float64),
        }
    )
    decile_counts = pd.DataFrame(
        {
            "word": pd.Series([], dtype=object),
            "decile": pd.Series([], dtype=np.float64),
            "count": pd.Series([], dtype=np.int64),
        }
    )
    return PositionalStats(
        word_stats=word_stats, decile_counts=decile_counts, threshold=threshold
    )
