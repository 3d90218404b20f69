import pytest

from gallery_board.config import Settings
from gallery_board.models import ITEMS_KEY
from gallery_board.storage import MemoryStorage
from gallery_board.store import ItemStore


class FailingStorage(MemoryStorage):
    """Reads work, every write raises."""

    def set(self, key, value):
        raise OSError("disk full")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def empty_store():
    return ItemStore(MemoryStorage({ITEMS_KEY: "[]"})).load()


@pytest.fixture
def abc_store(empty_store):
    for name in ("A", "B", "C"):
        empty_store.add(name, f"https://x/{name}.png")
    return empty_store


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", secret_key="test")
