import json
from pathlib import Path

from typer.testing import CliRunner

from story_arc_words.cli import app
from tests.utils import write_corpus, write_lexicon

runner = CliRunner()


def _analyze_args(tmp_path: Path) -> list[str]:
    plots, titles = write_corpus(tmp_path / "corpus")
    lexicon = write_lexicon(tmp_path / "afinn.txt")
    return [
        "analyze",
        "--plots",
        str(plots),
        "--titles",
        str(titles),
        "--lexicon",
        str(lexicon),
        "--min-count",
        "1",
        "--top-k",
        "1",
    ]


def test_cli_analyze_outputs_summary(tmp_path: Path):
    """analyze prints a JSON summary with the edge words."""
    result = runner.invoke(app, _analyze_args(tmp_path))
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["num_stories"] == 2
    assert payload["beginning_words"][0]["word"] == "the"
    assert payload["ending_words"][0]["word"] == "wins"


def test_cli_analyze_writes_tables(tmp_path: Path):
    output_dir = tmp_path / "out"
    result = runner.invoke(
        app, _analyze_args(tmp_path) + ["--output-dir", str(output_dir)]
    )
    assert result.exit_code == 0
    assert (output_dir / "peak_deciles.csv").exists()
    assert (output_dir / "summary.json").exists()


def test_cli_analyze_reports_malformed_corpus(tmp_path: Path):
    """Out-of-sync titles abort with a non-zero exit code."""
    plots, _ = write_corpus(tmp_path / "corpus")
    titles = tmp_path / "short_titles"
    titles.write_text("Only one\n", encoding="utf-8")
    result = runner.invoke(
        app, ["analyze", "--plots", str(plots), "--titles", str(titles)]
    )
    assert result.exit_code == 1


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])
    assert result.exit_code == 0
    assert "min_count" in result.stdout
