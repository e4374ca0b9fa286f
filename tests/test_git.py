"""Tests for git module."""

import pytest
from git import Repo

from boardsync.git import has_branch, init_repo, is_git_repo, read_config, write_config_key
from boardsync.model.tree import Board
from boardsync.model.writer import save_board


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    (repo_path / "README.md").write_text("# Test")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return repo_path


def test_is_git_repo_true(temp_repo):
    """Returns True for a git repository."""
    assert is_git_repo(temp_repo) is True


def test_is_git_repo_false(tmp_path):
    """Returns False for a non-git directory."""
    assert is_git_repo(tmp_path) is False


def test_is_git_repo_missing_path(tmp_path):
    """Returns False for a path that doesn't exist."""
    assert is_git_repo(tmp_path / "nope") is False


def test_init_repo(tmp_path):
    """Initialize a new git repository."""
    new_repo_path = tmp_path / "new_repo"
    new_repo_path.mkdir()
    assert init_repo(new_repo_path) is not None
    assert is_git_repo(new_repo_path)


def test_has_branch_false(temp_repo):
    """Returns False when branch doesn't exist."""
    assert has_branch(temp_repo, "boardsync") is False


def test_has_branch_after_save(empty_repo):
    """has_branch returns True once a board has been saved."""
    save_board(empty_repo, Board(name="x"), "Save")
    assert has_branch(empty_repo, "boardsync") is True


# --- read_config / write_config_key ---


def test_read_config_defaults(temp_repo):
    """Missing keys get defaults."""
    config = read_config(temp_repo)
    assert config == {
        "branch": "boardsync",
        "board_file": "board.yaml",
        "calendar_step": 10000.0,
        "calendar_origin": 0.0,
    }


def test_read_config_types(temp_repo):
    """Values are coerced using the type of their default."""
    repo = Repo(temp_repo)
    writer = repo.config_writer("repository")
    writer.set_value("boardsync", "calendar-step", "250")
    writer.set_value("boardsync", "branch", "kanban")
    writer.release()

    config = read_config(temp_repo)
    assert config["calendar_step"] == 250.0
    assert isinstance(config["calendar_step"], float)
    assert config["branch"] == "kanban"


def test_write_config_key(temp_repo):
    """Python-style keys are written git-style."""
    write_config_key(temp_repo, "board_file", "kanban.yaml")
    write_config_key(temp_repo, "calendar_origin", 5.5)

    reader = Repo(temp_repo).config_reader()
    assert reader.get_value("boardsync", "board-file") == "kanban.yaml"
    assert read_config(temp_repo)["calendar_origin"] == 5.5


def test_read_config_keeps_unknown_keys(temp_repo):
    """Keys without a default come back as strings."""
    write_config_key(temp_repo, "owner_note", "hello")
    assert read_config(temp_repo)["owner_note"] == "hello"
