from __future__ import annotations

from pathlib import Path

EXAMPLE_STORIES = [
    ("Story A", ["the old king died quietly"]),
    ("Story B", ["the hero shoots the villain and wins"]),
]

EXAMPLE_LEXICON = {"died": -3, "hero": 2, "villain": -2, "wins": 4}


def write_corpus(
    directory: Path, stories: list[tuple[str, list[str]]] = EXAMPLE_STORIES
) -> tuple[Path, Path]:
    """Write stories in the plots/titles layout with <EOS> after each story."""
    directory.mkdir(parents=True, exist_ok=True)
    plot_lines: list[str] = []
    titles: list[str] = []
    for title, lines in stories:
        titles.append(title)
        plot_lines.extend(lines)
        plot_lines.append("<EOS>")
    plots_path = directory / "plots"
    titles_path = directory / "titles"
    plots_path.write_text("\n".join(plot_lines) + "\n", encoding="utf-8")
    titles_path.write_text("\n".join(titles) + "\n", encoding="utf-8")
    return plots_path, titles_path


def write_lexicon(path: Path, lexicon: dict[str, int] = EXAMPLE_LEXICON) -> Path:
    """Write an AFINN-style tab-separated lexicon."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "".join(f"{word}\t{score}\n" for word, score in lexicon.items()),
        encoding="utf-8",
    )
    return path
