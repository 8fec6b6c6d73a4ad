from __future__ import annotations

from pathlib import Path

import click
import requests

from ..logging_setup import configure_logging
from . import download


@click.group(name="corpus")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress.")
def corpus_group(verbose: bool) -> None:
    """Commands for fetching the plot corpus and sentiment lexicon."""
    configure_logging(verbose)


@corpus_group.command("download-lexicon")
@click.option("--url", default=None, help="Lexicon URL (defaults to AFINN-165).")
@click.option(
    "--dest",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination file.",
)
def corpus_download_lexicon(url: str | None, dest: Path | None) -> None:
    """Download the AFINN sentiment lexicon."""
    try:
        path = download.download_lexicon(url=url, dest=dest)
    except (requests.RequestException, OSError) as exc:
        raise click.ClickException(f"Failed to download lexicon: {exc}") from exc
    click.echo(f"Lexicon available at {path}")


@corpus_group.command("download-corpus")
@click.option("--url", required=True, help="URL or path of the plots/titles zip.")
@click.option(
    "--dest-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=download.CORPUS_DIR,
    show_default=True,
    help="Directory receiving the extracted plots and titles files.",
)
def corpus_download_corpus(url: str, dest_dir: Path) -> None:
    """Download and extract the plot summary corpus."""
    try:
        paths = download.download_corpus_archive(url, dest_dir=dest_dir)
    except (requests.RequestException, OSError, ValueError) as exc:
        raise click.ClickException(f"Failed to download corpus: {exc}") from exc
    for name, path in paths.items():
        click.echo(f"{name}: {path}")
