from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from story_arc_words.corpus import download
from story_arc_words.corpus.cli import corpus_group


def test_download_lexicon_copies_local_source(tmp_path: Path):
    source = tmp_path / "AFINN-en-165.txt"
    source.write_text("good\t3\n", encoding="utf-8")
    dest = tmp_path / "lexicon" / "afinn.txt"

    path = download.download_lexicon(url=str(source), dest=dest)

    assert path == dest
    assert dest.read_text(encoding="utf-8") == "good\t3\n"


def test_download_lexicon_uses_requests(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Remote URLs stream through requests.get into the destination file."""
    calls: dict[str, object] = {}

    class DummyResponse:
        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def raise_for_status(self) -> None:
            calls["checked"] = True

        def iter_content(self, chunk_size: int):
            yield b"bad\t-3\n"

    def fake_get(url: str, stream: bool, timeout: int):
        calls["url"] = url
        return DummyResponse()

    monkeypatch.setattr(download.requests, "get", fake_get)
    dest = tmp_path / "afinn.txt"
    download.download_lexicon(url="https://example.org/afinn.txt", dest=dest)

    assert calls["url"] == "https://example.org/afinn.txt"
    assert calls["checked"] is True
    assert dest.read_text(encoding="utf-8") == "bad\t-3\n"


def test_download_corpus_archive_extracts_members(tmp_path: Path):
    archive = tmp_path / "plots.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("wikiplots/plots", "a plot\n<EOS>\n")
        zf.writestr("wikiplots/titles", "A title\n")
    dest_dir = tmp_path / "corpus"

    paths = download.download_corpus_archive(str(archive), dest_dir=dest_dir)

    assert paths["plots"].read_text(encoding="utf-8") == "a plot\n<EOS>\n"
    assert paths["titles"].read_text(encoding="utf-8") == "A title\n"


def test_download_corpus_archive_requires_both_members(tmp_path: Path):
    archive = tmp_path / "plots.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("plots", "a plot\n<EOS>\n")
    with pytest.raises(FileNotFoundError):
        download.download_corpus_archive(str(archive), dest_dir=tmp_path / "corpus")


def test_corpus_cli_download_lexicon(tmp_path: Path):
    source = tmp_path / "source.txt"
    source.write_text("happy\t3\n", encoding="utf-8")
    dest = tmp_path / "out" / "afinn.txt"
    result = CliRunner().invoke(
        corpus_group,
        ["download-lexicon", "--url", str(source), "--dest", str(dest)],
    )
    assert result.exit_code == 0
    assert dest.exists()


def test_download_file_copies_relative_local_path(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
):
    """A relative path that exists is copied without touching the network."""

    def fail_get(*args, **kwargs):
        raise AssertionError("requests.get should not be called for local paths")

    monkeypatch.setattr(download.requests, "get", fail_get)
    monkeypatch.chdir(tmp_path)
    source = Path("data") / "wikiplots.zip"
    source.parent.mkdir()
    source.write_bytes(b"zip bytes")
    dest = tmp_path / "copy" / "wikiplots.zip"

    download.download_file("data/wikiplots.zip", dest)

    assert dest.read_bytes() == b"zip bytes"


def test_download_file_accepts_file_url(tmp_path: Path):
    source = tmp_path / "afinn.txt"
    source.write_text("sad\t-2\n", encoding="utf-8")
    dest = tmp_path / "out" / "afinn.txt"

    download.download_file(f"file://{source}", dest)

    assert dest.read_text(encoding="utf-8") == "sad\t-2\n"
