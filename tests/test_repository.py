"""Tests for the in-memory repository."""

from pctf.persistence.repository import InMemoryRepository


class TestInMemoryRepository:
    def test_put_get(self) -> None:
        repo: InMemoryRepository[int] = InMemoryRepository()
        repo.put("a", 1)
        assert repo.get("a") == 1
        assert repo.get("b") is None
        assert repo.contains("a")
        assert len(repo) == 1

    def test_insertion_order(self) -> None:
        repo: InMemoryRepository[int] = InMemoryRepository()
        for key in ("c", "a", "b"):
            repo.put(key, ord(key))
        assert [k for k, _ in repo.items()] == ["c", "a", "b"]
        assert repo.values() == [ord("c"), ord("a"), ord("b")]

    def test_put_while_iterating(self) -> None:
        repo: InMemoryRepository[int] = InMemoryRepository()
        repo.put("a", 1)
        for key, value in repo.items():
            repo.put(key + "2", value + 1)
        assert len(repo) == 2
