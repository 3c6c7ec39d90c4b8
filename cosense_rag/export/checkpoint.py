import logging
from datetime import timedelta
from pydantic import ValidationError

from cosense_rag.common.redis import RedisClient
from cosense_rag.export.schemas import SyncCheckpoint

logger = logging.getLogger(__name__)


class SyncCheckpointStore:
    """Keeps the pagination offset of the running sync in Redis.

    Checkpoints live outside the object store so they never reach the
    search index.
    """

    def __init__(
        self, redis_client: RedisClient, ttl: timedelta = timedelta(days=1)
    ) -> None:
        self.redis_client = redis_client
        self.ttl = ttl

    def _key(self, project: str) -> str:
        return f"sync-checkpoint:{project}"

    def load(self, project: str) -> SyncCheckpoint | None:
        raw = self.redis_client.get(self._key(project))
        if not raw:
            return None

        try:
            return SyncCheckpoint.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Ignoring unreadable checkpoint for project {project}")
            return None

    def save(self, checkpoint: SyncCheckpoint) -> None:
        self.redis_client.set(
            self._key(checkpoint.project), checkpoint.model_dump_json(), ex=self.ttl
        )

    def clear(self, project: str) -> None:
        self.redis_client.delete(self._key(project))
