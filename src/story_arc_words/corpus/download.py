from __future__ import annotations

import logging
import os
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import Dict

import requests

CORPUS_DIR = Path("data/wikiplots")
LEXICON_DIR = Path("data/lexicon")
CORPUS_MEMBERS = ("plots", "titles")
DEFAULT_LEXICON_URL = (
    "https://raw.githubusercontent.com/fnielsen/afinn/master/"
    "afinn/data/AFINN-en-165.txt"
)

LOGGER = logging.getLogger(__name__)


def download_lexicon(url: str | None = None, dest: Path | None = None) -> Path:
    """Download the AFINN sentiment word list."""
    if url is None:
        url = os.environ.get("STORY_ARC_LEXICON_URL", DEFAULT_LEXICON_URL)
    if dest is None:
        filename = url.split("/")[-1] or "lexicon.txt"
        dest = LEXICON_DIR / filename
    if dest.exists():
        LOGGER.info("Lexicon already exists at %s; skipping.", dest)
        return dest
    LOGGER.info("Downloading sentiment lexicon from %s", url)
    download_file(url, dest)
    return dest


def download_corpus_archive(url: str, dest_dir: Path = CORPUS_DIR) -> Dict[str, Path]:
    """
    Download a zip archive holding ``plots`` and ``titles`` and extract both.

    Members are matched by file name regardless of the folder they sit in.
    """
    targets = {name: dest_dir / name for name in CORPUS_MEMBERS}
    if all(path.exists() for path in targets.values()):
        LOGGER.info("Corpus already extracted under %s; skipping.", dest_dir)
        return targets

    archive_path = dest_dir / "wikiplots.zip"
    if not archive_path.exists():
        LOGGER.info("Downloading corpus archive from %s", url)
        download_file(url, archive_path)
    _extract_members(archive_path, targets)
    return targets


def download_file(url: str, dest: Path) -> None:
    """
    Fetch url into dest.

    file:// URLs and paths that exist locally, relative or absolute, are
    copied; anything else is streamed over HTTP.
    """
    if url.startswith("file://"):
        _copy_local_file(Path(url[7:]), dest)
    elif url.startswith("/") or Path(url).exists():
        _copy_local_file(Path(url), dest)
    else:
        _stream_download(url, dest)


def _extract_members(archive_path: Path, targets: Dict[str, Path]) -> None:
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            by_name = {
                PurePosixPath(info.filename).name: info
                for info in zf.infolist()
                if not info.is_dir()
            }
            for name, dest in targets.items():
                info = by_name.get(name)
                if info is None:
                    raise FileNotFoundError(
                        f"Archive {archive_path} has no member named {name!r}"
                    )
                dest.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, dest.open("wb") as handle:
                    shutil.copyfileobj(src, handle)
                LOGGER.info("Extracted %s to %s", info.filename, dest)
    except zipfile.BadZipFile as exc:
        raise ValueError(f"Invalid corpus archive: {archive_path}") from exc


def _stream_download(url: str, dest: Path, chunk_size: int = 1 << 14) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=60) as response:
        response.raise_for_status()
        tmp_path = dest.with_suffix(dest.suffix + ".tmp")
        with tmp_path.open("wb") as handle:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if chunk:
                    handle.write(chunk)
        tmp_path.replace(dest)


def _copy_local_file(src: Path, dest: Path) -> None:
    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dest)
