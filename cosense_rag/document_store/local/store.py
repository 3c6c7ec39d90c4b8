from pathlib import Path

from cosense_rag.document_store.base import ObjectStoreBackend


class LocalObjectStore(ObjectStoreBackend):
    """Stores each object as a UTF-8 file under base_path/<key>."""

    def __init__(self, base_path: Path | str):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _object_path(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        if not path.is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Key escapes the store directory: {key}")
        return path

    def put_object(self, key: str, content: str) -> None:
        path = self._object_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)

    def get_object(self, key: str) -> str | None:
        path = self._object_path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def delete_object(self, key: str) -> None:
        self._object_path(key).unlink(missing_ok=True)

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = [
            path.relative_to(self.base_path).as_posix()
            for path in self.base_path.rglob("*")
            if path.is_file() and not path.name.endswith(".tmp")
        ]
        return sorted(key for key in keys if key.startswith(prefix))

    def ping(self) -> None:
        if not self.base_path.is_dir():
            raise RuntimeError(f"Store directory {self.base_path} does not exist")
