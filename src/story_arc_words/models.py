from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

DECILE_INDEXES = tuple(range(1, 11))
DECILES = tuple(index / 10 for index in DECILE_INDEXES)


def decile_index(rank: int, story_length: int) -> int:
    """Return ceil(10 * rank / story_length) using integer arithmetic."""
    return (10 * rank + story_length - 1) // story_length


@dataclass(slots=True, frozen=True)
class StoryLine:
    """A single plot line tagged with the story it belongs to."""

    story_id: int
    title: str
    text: str


@dataclass(slots=True, frozen=True)
class Story:
    """A plot summary reassembled from its lines."""

    story_id: int
    title: str
    lines: tuple[str, ...]

    @property
    def body(self) -> str:
        return " ".join(self.lines)


@dataclass(slots=True, frozen=True)
class Token:
    """A word occurrence with its 1-based rank inside the story."""

    story_id: int
    word: str
    rank: int
    story_length: int

    @property
    def normalized_position(self) -> float:
        return self.rank / self.story_length

    @property
    def decile_index(self) -> int:
        return decile_index(self.rank, self.story_length)

    @property
    def decile(self) -> float:
        return self.decile_index / 10


@dataclass(slots=True)
class PositionalStats:
    """Per-word position statistics for words meeting the count threshold."""

    word_stats: pd.DataFrame
    decile_counts: pd.DataFrame
    threshold: int

    @property
    def num_words(self) -> int:
        return len(self.word_stats)


@dataclass(slots=True)
class ArcReport:
    """All tables produced by a pipeline run."""

    num_stories: int
    num_tokens: int
    stats: PositionalStats
    beginning_words: pd.DataFrame
    ending_words: pd.DataFrame
    peak_deciles: pd.DataFrame
    top_peak_words: pd.DataFrame
    sentiment_curve: pd.DataFrame
