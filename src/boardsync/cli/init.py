"""Handler for 'boardsync init'."""

from pathlib import Path

from boardsync.cli._common import output_json
from boardsync.git import has_branch, init_repo, is_git_repo, read_config
from boardsync.model.loader import load_board
from boardsync.model.tree import Board, CardList, reindex_lists
from boardsync.model.writer import save_board

DEFAULT_LISTS = ("Backlog", "Doing", "Done")


def init_board(args) -> int:
    """Initialize a board on the configured branch of the repository."""
    repo_path = Path(args.repo).resolve()

    if not is_git_repo(repo_path):
        init_repo(repo_path)

    config = read_config(repo_path)
    branch, board_file = config["branch"], config["board_file"]

    if has_branch(repo_path, branch):
        board = load_board(str(repo_path), branch, board_file)
        if args.json:
            output_json({"repo_path": str(repo_path), "lists": [lst.name for lst in board.lists], "created": False})
        else:
            print(f"Board already initialized at {repo_path}")
        return 0

    lists = [CardList(id=f"l{i}", name=name) for i, name in enumerate(DEFAULT_LISTS, start=1)]
    board = Board(id="board", name=args.name or repo_path.name, lists=reindex_lists(lists))
    save_board(repo_path, board, "Initialize board", branch, board_file)

    names = [lst.name for lst in board.lists]
    if args.json:
        output_json({"repo_path": str(repo_path), "lists": names, "created": True})
    else:
        print(f"Initialized board at {repo_path}")
        print(f"Lists: {', '.join(names)}")

    return 0
