from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

from .models import Story, Token
from .textutils import iter_words

LOGGER = logging.getLogger(__name__)


def tokenize_story(story: Story) -> List[str]:
    """Split a story body into its ordered lowercase words."""
    return list(iter_words(story.body))


def iter_tokens(stories: Iterable[Story]) -> Iterator[Token]:
    """
    Lazily yield ranked tokens for every story.

    A story's length is only known once all of its words are read, so each
    story is buffered before its tokens are emitted. Stories without words
    produce no tokens.
    """
    for story in stories:
        words = tokenize_story(story)
        if not words:
            LOGGER.debug("Skipping story %d (%r): no tokens.", story.story_id, story.title)
            continue
        story_length = len(words)
        for rank, word in enumerate(words, start=1):
            yield Token(
                story_id=story.story_id,
                word=word,
                rank=rank,
                story_length=story_length,
            )

