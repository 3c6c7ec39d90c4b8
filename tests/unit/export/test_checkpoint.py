from datetime import timedelta
from unittest.mock import MagicMock

from cosense_rag.export.checkpoint import SyncCheckpointStore
from cosense_rag.export.schemas import SyncCheckpoint


def make_checkpoint(run_id: str | None = "task-1") -> SyncCheckpoint:
    return SyncCheckpoint(
        project="test-project",
        run_id=run_id,
        skip=100,
        total_count=250,
        updated_at="2024-01-01T00:00:00+00:00",
    )


def test_save_sets_expiring_key(
    checkpoint_store: SyncCheckpointStore, mock_redis_client: MagicMock
) -> None:
    checkpoint = make_checkpoint()

    checkpoint_store.save(checkpoint)

    mock_redis_client.set.assert_called_once_with(
        "sync-checkpoint:test-project",
        checkpoint.model_dump_json(),
        ex=timedelta(days=1),
    )


def test_load_returns_saved_checkpoint(
    checkpoint_store: SyncCheckpointStore,
) -> None:
    checkpoint_store.save(make_checkpoint())

    assert checkpoint_store.load("test-project") == make_checkpoint()


def test_load_missing(checkpoint_store: SyncCheckpointStore) -> None:
    assert checkpoint_store.load("test-project") is None


def test_load_ignores_unreadable_value(
    checkpoint_store: SyncCheckpointStore, mock_redis_client: MagicMock
) -> None:
    mock_redis_client.set("sync-checkpoint:test-project", "not json")

    assert checkpoint_store.load("test-project") is None


def test_clear(checkpoint_store: SyncCheckpointStore) -> None:
    checkpoint_store.save(make_checkpoint())

    checkpoint_store.clear("test-project")

    assert checkpoint_store.load("test-project") is None
