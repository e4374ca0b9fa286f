"""Shared fixtures: board builders, recording stores, git repos."""

import pytest
from git import Repo

from boardsync.model.tree import Board, Card, CardList, reindex_cards, reindex_lists
from boardsync.model.writer import save_board
from boardsync.session import BoardSession
from boardsync.store import MemoryBoardStore, StoreError


def build_board(lists: dict, name: str = "Test Board") -> Board:
    """Build a board from {list_id: [card_id | Card, ...]}."""
    built = []
    for list_id, cards in lists.items():
        card_objs = [c if isinstance(c, Card) else Card(id=c, title=f"Card {c}") for c in cards]
        built.append(CardList(id=list_id, name=f"List {list_id}", cards=reindex_cards(card_objs)))
    return Board(id="board", name=name, lists=reindex_lists(built))


REMOTE_METHODS = (
    "move_list",
    "move_card",
    "bulk_move_cards",
    "bulk_update_cards",
    "update_card",
    "delete_card",
    "delete_list",
)


def _recorded(name):
    async def method(self, payload):
        self.calls.append((name, payload))
        if name in self.failing:
            raise StoreError("INTERNAL", f"{name} failed")
        return await getattr(MemoryBoardStore, name)(self, payload)

    method.__name__ = name
    return method


class RecordingStore(MemoryBoardStore):
    """MemoryBoardStore that records remote calls and can fail chosen ones."""

    def __init__(self, board, failing=()):
        super().__init__(board)
        self.calls = []
        self.failing = set(failing)
        self.fetches = 0

    async def fetch_board(self):
        self.fetches += 1
        return await super().fetch_board()


for _name in REMOTE_METHODS:
    setattr(RecordingStore, _name, _recorded(_name))


@pytest.fixture
def make_board():
    return build_board


@pytest.fixture
def abc_board():
    """A(c1, c2), B(c3, c4), C() -- the board most drag tests start from."""
    return build_board({"A": ["c1", "c2"], "B": ["c3", "c4"], "C": []})


@pytest.fixture
def make_session():
    """Factory: (session, store, notices) over a recording store."""
    sessions = []

    def _make(board, failing=(), **kwargs):
        store = RecordingStore(board, failing=failing)
        notices = []
        session = BoardSession(store, notify=lambda header, message: notices.append(header), **kwargs)
        sessions.append(session)
        return session, store, notices

    yield _make
    for session in sessions:
        session.close()


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo with a committer identity."""
    repo = Repo.init(tmp_path)
    with repo.config_writer("repository") as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
    (tmp_path / ".gitkeep").write_text("")
    repo.index.add([".gitkeep"])
    repo.index.commit("Initial commit")
    return tmp_path


@pytest.fixture
def board_repo(empty_repo):
    """A repo whose board branch holds abc-style lists with titled cards."""
    board = build_board({"l1": ["c1", "c2"], "l2": ["c3"], "l3": []})
    save_board(empty_repo, board, "Initialize test board")
    return empty_repo
