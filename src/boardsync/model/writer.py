"""Save a board to a git branch without touching the working tree."""

import subprocess
from pathlib import Path

import yaml

from boardsync.git import BOARDSYNC_DEFAULTS
from boardsync.model.tree import Board


def board_to_dict(board: Board) -> dict:
    """Convert a Board to plain YAML-safe data. Indices are implied by order."""
    return {
        "id": board.id,
        "name": board.name,
        "lists": [
            {
                "id": lst.id,
                "name": lst.name,
                "cards": [_card_to_dict(card) for card in lst.cards],
            }
            for lst in board.lists
        ],
    }


def _card_to_dict(card) -> dict:
    data = {"id": card.id, "title": card.title}
    if card.description:
        data["description"] = card.description
    if card.due_date is not None:
        data["due_date"] = card.due_date.isoformat()
    if card.calendar_order is not None:
        data["calendar_order"] = card.calendar_order
    return data


def serialize_board(board: Board) -> str:
    """Render a board as YAML text."""
    return yaml.safe_dump(board_to_dict(board), sort_keys=False, allow_unicode=True)


# --- Git plumbing ---


def _git(repo_path: Path, args: list[str], stdin: str | None = None) -> str:
    """Run a git command and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        input=stdin.encode("utf-8") if stdin is not None else None,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def _get_branch_tip(repo_path: Path, branch: str) -> str | None:
    """Get the current commit hash of a branch, or None if it doesn't exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", f"refs/heads/{branch}"],
        cwd=repo_path,
        capture_output=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8").strip()


def save_board(
    repo_path: str | Path,
    board: Board,
    message: str = "Update board",
    branch: str = BOARDSYNC_DEFAULTS["branch"],
    board_file: str = BOARDSYNC_DEFAULTS["board-file"],
) -> str:
    """Commit the board file on branch and return the commit hash.

    Returns the current tip unchanged when the board content is identical.
    """
    repo_path = Path(repo_path)

    blob = _git(repo_path, ["hash-object", "-w", "--stdin"], stdin=serialize_board(board))
    tree = _git(repo_path, ["mktree"], stdin=f"100644 blob {blob}\t{board_file}\n")

    parent = _get_branch_tip(repo_path, branch)
    if parent is not None:
        parent_tree = _git(repo_path, ["rev-parse", f"{parent}^{{tree}}"])
        if parent_tree == tree:
            return parent

    parent_args = ["-p", parent] if parent else []
    new_commit = _git(repo_path, ["commit-tree", tree, *parent_args, "-m", message])
    _git(repo_path, ["update-ref", f"refs/heads/{branch}", new_commit])
    return new_commit
