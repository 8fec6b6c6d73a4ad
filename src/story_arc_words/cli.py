from __future__ import annotations

import json
from pathlib import Path

import typer
import yaml

from .config import ArcConfig, load_config
from .loader import MalformedCorpusError
from .logging_setup import configure_logging
from .pipeline import report_summary, run_pipeline, write_report

app = typer.Typer(help="Story arc word-position CLI.", no_args_is_help=True)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress."),
) -> None:
    configure_logging(verbose)


@app.command()
def analyze(
    plots: Path | None = typer.Option(
        None, "--plots", exists=True, dir_okay=False, help="Plot lines file."
    ),
    titles: Path | None = typer.Option(
        None, "--titles", exists=True, dir_okay=False, help="Titles file."
    ),
    lexicon: Path | None = typer.Option(
        None, "--lexicon", help="AFINN-style word<TAB>score lexicon."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    min_count: int | None = typer.Option(
        None, "--min-count", help="Minimum occurrences for a word to be reported."
    ),
    top_k: int | None = typer.Option(
        None, "--top-k", help="Number of beginning and ending words to report."
    ),
    shard_size: int | None = typer.Option(
        None, "--shard-size", help="Stories per tokenization shard."
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", file_okay=False, help="Write CSV tables here."
    ),
) -> None:
    """Analyze where words fall in story arcs and emit a JSON summary."""
    cfg = load_config(config)
    _apply_overrides(cfg, plots, titles, lexicon, min_count, top_k, shard_size, output_dir)
    try:
        cfg.validate()
        report = run_pipeline(cfg)
    except (MalformedCorpusError, FileNotFoundError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if cfg.output_dir:
        write_report(report, cfg.output_dir)
    typer.echo(json.dumps(report_summary(report), indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ArcConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _apply_overrides(
    config: ArcConfig,
    plots: Path | None,
    titles: Path | None,
    lexicon: Path | None,
    min_count: int | None,
    top_k: int | None,
    shard_size: int | None,
    output_dir: Path | None,
) -> None:
    """Apply CLI overrides to config fields when provided."""
    if plots:
        config.plots_path = str(plots)
    if titles:
        config.titles_path = str(titles)
    if lexicon:
        config.lexicon_path = str(lexicon)
    if min_count is not None:
        config.min_count = min_count
    if top_k is not None:
        config.top_k = top_k
    if shard_size is not None:
        config.shard_size = shard_size
    if output_dir:
        config.output_dir = str(output_dir)


if __name__ == "__main__":
    main()
