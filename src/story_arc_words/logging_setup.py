from __future__ import annotations

import logging


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging; INFO when verbose, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
