"""Path helpers for robust repo-root-relative file resolution."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def find_repo_root(start: Path | None = None) -> Path:
    current = (start or Path(__file__).resolve()).resolve()
    if current.is_file():
        current = current.parent

    for candidate in [current, *current.parents]:
        if (candidate / "pyproject.toml").is_file():
            return candidate
        if (candidate / ".git").exists():
            return candidate
    # installed outside a checkout: config.yaml, .env and logging.ini are looked up in the cwd
    cwd = Path.cwd()
    logger.debug("no pyproject.toml or .git above %s, using working directory %s", current, cwd)
    return cwd


def repo_root() -> Path:
    return find_repo_root(Path(__file__).resolve())


def repo_file(*parts: str) -> Path:
    return repo_root().joinpath(*parts)
