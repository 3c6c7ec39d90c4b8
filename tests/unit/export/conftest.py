from unittest.mock import MagicMock
import pytest
from pytest_mock import MockerFixture

from cosense_rag.export.checkpoint import SyncCheckpointStore


@pytest.fixture
def mock_redis_client(mocker: MockerFixture) -> MagicMock:
    data: dict[str, str] = {}
    redis_client = mocker.MagicMock()
    redis_client.get.side_effect = data.get
    redis_client.set.side_effect = lambda key, value, ex=None: data.__setitem__(
        key, value
    )
    redis_client.delete.side_effect = lambda key: data.pop(key, None)
    return redis_client


@pytest.fixture
def checkpoint_store(mock_redis_client: MagicMock) -> SyncCheckpointStore:
    return SyncCheckpointStore(mock_redis_client)
