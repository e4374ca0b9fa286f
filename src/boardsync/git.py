"""Git repository helpers and the [boardsync] git config section."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

SECTION = "boardsync"

BOARDSYNC_DEFAULTS = {
    "branch": "boardsync",
    "board-file": "board.yaml",
    "calendar-step": 10000.0,
    "calendar-origin": 0.0,
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce(git_key: str, raw: str) -> Any:
    """Type-coerce a config value using the type of its default."""
    default = BOARDSYNC_DEFAULTS.get(git_key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, int):
        return int(raw)
    return raw


def read_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [boardsync] section as a python-keyed dict with defaults filled in."""
    reader = _get_repo(repo_path).config_reader()
    result: dict[str, Any] = {}
    if reader.has_section(SECTION):
        for git_k, raw in reader.items(SECTION):
            result[_python_key(git_k)] = _coerce(git_k, raw)
    for git_k, default in BOARDSYNC_DEFAULTS.items():
        result.setdefault(_python_key(git_k), default)
    return result


def write_config_key(repo_path: str | Path, key: str, value: Any) -> None:
    """Write one key to the [boardsync] section. key is python-style."""
    writer = _get_repo(repo_path).config_writer("repository")
    try:
        if isinstance(value, bool):
            writer.set_value(SECTION, _git_key(key), str(value).lower())
        else:
            writer.set_value(SECTION, _git_key(key), str(value))
    finally:
        writer.release()


def _get_repo(repo_path: str | Path) -> Repo:
    return Repo(repo_path)


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    try:
        Repo(path)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def init_repo(path: str | Path) -> Repo:
    """Initialize a new git repository at path."""
    return Repo.init(path)


def has_branch(repo_path: str | Path, branch: str) -> bool:
    """Check if a local branch exists."""
    return branch in [h.name for h in _get_repo(repo_path).heads]
