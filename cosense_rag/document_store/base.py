from abc import ABC, abstractmethod


class ObjectStoreBackend(ABC):
    """Key/value text storage. put_object overwrites any existing value."""

    @abstractmethod
    def put_object(self, key: str, content: str) -> None:
        pass

    @abstractmethod
    def get_object(self, key: str) -> str | None:
        pass

    @abstractmethod
    def delete_object(self, key: str) -> None:
        pass

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        pass

    @abstractmethod
    def ping(self) -> None:
        """Raise if the store is unreachable."""
        pass
