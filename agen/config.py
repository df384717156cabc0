"""Tasks directory discovery.

Order of precedence:
- explicit path (``--dir`` on the command line),
- ``AGEN_TASKS_DIR`` environment variable,
- ``$HOME/.agen/tasks``.
"""

from __future__ import annotations

import os
from pathlib import Path

from agen.domain.errors import InvalidStorePathError

ENV_PREFIX = "AGEN"
TASKS_DIR_ENV = f"{ENV_PREFIX}_TASKS_DIR"
DEFAULT_SUBDIR = Path(".agen") / "tasks"


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


def resolve_tasks_dir(explicit: str | Path | None = None) -> Path:
    """Return the configured tasks directory without touching the filesystem."""
    if explicit is not None and str(explicit) != "":
        return Path(explicit).expanduser()
    from_env = _env_path(TASKS_DIR_ENV)
    if from_env is not None:
        return from_env
    home = os.getenv("HOME")
    if not home:
        raise InvalidStorePathError("", "$HOME not set")
    return Path(home) / DEFAULT_SUBDIR


def ensure_tasks_dir(path: Path, *, create: bool = False) -> Path:
    """
    Check that ``path`` is an existing directory.

    With ``create=True`` missing directories (and parents) are created first.
    """
    if create:
        path.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        raise InvalidStorePathError(str(path), "tasks directory missing")
    if not path.is_dir():
        raise InvalidStorePathError(str(path), "tasks path is not a directory")
    return path
