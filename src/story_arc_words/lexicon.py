from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Mapping

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)


def load_lexicon(path: str | Path) -> Dict[str, int]:
    """
    Load an AFINN-style sentiment lexicon.

    Parameters
    ----------
    path:
        Tab-separated file with one ``word<TAB>score`` entry per line and no
        header. Rows that cannot be parsed are skipped.
    """
    path = Path(path)
    lexicon: Dict[str, int] = {}
    if not path.exists():
        LOGGER.warning("Sentiment lexicon not found at %s.", path)
        return lexicon

    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.reader(handle, delimiter="\t", quoting=csv.QUOTE_NONE)
        for line_number, row in enumerate(reader, start=1):
            if not row or not "".join(row).strip():
                continue
            if len(row) != 2:
                LOGGER.warning("Skipping lexicon line %d: %r", line_number, row)
                continue
            word, score = row
            try:
                lexicon[word.strip().lower()] = int(score)
            except ValueError:
                LOGGER.warning("Skipping lexicon line %d: bad score %r", line_number, score)

    LOGGER.info("Loaded %d lexicon entries from %s.", len(lexicon), path)
    return lexicon


def lexicon_frame(lexicon: Mapping[str, int]) -> pd.DataFrame:
    """Return the lexicon as a ``word``/``score`` frame for joining."""
    return pd.DataFrame(
        {
            "word": pd.Series(list(lexicon.keys()), dtype=object),
            "score": np.asarray(list(lexicon.values()), dtype=np.int64),
        }
    )
