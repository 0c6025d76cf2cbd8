"""Helpers for the per-user cache directory and file downloads."""

import os
import shutil
import urllib.request
from pathlib import Path

CACHE_DIR_NAME = ".crs-toolchain"


def download_file(path, url):
    """Download ``url`` into the file at ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")
    try:
        with urllib.request.urlopen(url) as response, open(partial, "wb") as out:
            shutil.copyfileobj(response, out)
        os.replace(partial, target)
    finally:
        if partial.exists():
            partial.unlink()


def get_cache_file_path(file_name):
    """Return the path of ``file_name`` inside the cache directory, creating the directory."""
    cache_dir = Path.home() / CACHE_DIR_NAME
    cache_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    return cache_dir / file_name