from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .models import Story, StoryLine

EOS_SENTINEL = "<EOS>"

LOGGER = logging.getLogger(__name__)


class MalformedCorpusError(ValueError):
    """Raised when plot lines and titles are out of sync."""


MalformedCorpus = MalformedCorpusError


def iter_story_lines(
    plot_lines: Iterable[str], titles: Sequence[str]
) -> Iterator[StoryLine]:
    """
    Assign every plot line to its story and title.

    The story counter starts at 1 and advances on each ``<EOS>`` line; the
    sentinel itself is not part of any story. Titles are looked up 1-based.
    """
    story_id = 1
    for line_number, raw_line in enumerate(plot_lines, start=1):
        line = raw_line.rstrip("\r\n")
        if line == EOS_SENTINEL:
            story_id += 1
            continue
        if story_id > len(titles):
            raise MalformedCorpusError(
                f"Plot line {line_number} belongs to story {story_id} but only "
                f"{len(titles)} titles were provided."
            )
        yield StoryLine(story_id=story_id, title=titles[story_id - 1], text=line)


def group_stories(records: Iterable[StoryLine]) -> List[Story]:
    """Group loader records into stories, keeping story and line order."""
    stories: List[Story] = []
    current_id: int | None = None
    current_title = ""
    current_lines: list[str] = []

    for record in records:
        if record.story_id != current_id:
            if current_id is not None:
                stories.append(Story(current_id, current_title, tuple(current_lines)))
            current_id = record.story_id
            current_title = record.title
            current_lines = []
        current_lines.append(record.text)

    if current_id is not None:
        stories.append(Story(current_id, current_title, tuple(current_lines)))
    return stories


def read_lines(path: str | Path) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines without line endings.

    Only \\n, \\r\\n and \\r end a line; other Unicode separators such as
    U+2028 stay inside the line they appear in.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")
    with path.open("r", encoding="utf-8", errors="replace", newline="") as handle:
        return [line.rstrip("\r\n") for line in handle]


def load_corpus(plots_path: str | Path, titles_path: str | Path) -> List[Story]:
    """Load the plots/titles pair into an ordered list of stories."""
    titles = read_lines(titles_path)
    plot_lines = read_lines(plots_path)
    stories = group_stories(iter_story_lines(plot_lines, titles))
    LOGGER.info(
        "Loaded %d stories from %s (%d titles).", len(stories), plots_path, len(titles)
    )
    return stories
