import json
from typing import Any

from celery import Celery

from cosense_rag.common.exceptions import ResourceNotFoundException, ResourceType
from cosense_rag.common.redis import RedisClient
from cosense_rag.tasks.schemas import Task
from cosense_rag.tasks.sync_pages import sync_project_pages_task


class TaskService:
    def __init__(self, *, redis_client: RedisClient, celery_app: Celery) -> None:
        self.key_prefix = "celery-task-meta-"
        self.redis_client = redis_client
        self.celery_app = celery_app

    def _map_task(self, task: dict[str, Any]) -> Task:
        return Task(
            id=task.get("task_id"),
            status=task.get("status"),
            completed_at=task.get("date_done"),
            metadata=task.get("result"),
        )

    def list_tasks(self) -> list[Task]:
        tasks: list[Task] = []
        for key in self.redis_client.scan_iter(f"{self.key_prefix}*"):
            task = self.redis_client.get(key)
            if task:
                tasks.append(self._map_task(json.loads(task)))
        # Most recent first; unfinished tasks have no date_done
        return sorted(tasks, key=lambda t: t.completed_at or "", reverse=True)

    def get_task(self, task_id: str) -> Task:
        task = self.redis_client.get(f"{self.key_prefix}{task_id}")
        if not task:
            raise ResourceNotFoundException(ResourceType.TASK, task_id)
        return self._map_task(json.loads(task))

    def terminate_task(self, task_id: str) -> None:
        if not self.redis_client.exists(f"{self.key_prefix}{task_id}"):
            raise ResourceNotFoundException(ResourceType.TASK, task_id)

        self.celery_app.control.revoke(task_id, terminate=True)

    def start_sync(self, project_name: str) -> str:
        task = sync_project_pages_task.delay(project_name=project_name)
        return task.id
