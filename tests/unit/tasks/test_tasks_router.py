from typing import Generator
from unittest.mock import MagicMock
import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from cosense_rag.common.exceptions import ResourceNotFoundException, ResourceType
from cosense_rag.config import Settings, get_settings
from cosense_rag.main import app
from cosense_rag.tasks.dependencies import get_task_service
from cosense_rag.tasks.schemas import Task
from cosense_rag.tasks.service import TaskService


@pytest.fixture
def mock_task_service(mocker: MockerFixture) -> MagicMock:
    return mocker.MagicMock(spec=TaskService)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(PROJECT_NAME="help-jp", API_KEY=None, WORKERS_ENABLED=True)


@pytest.fixture
def client(
    mock_task_service: MagicMock, test_settings: Settings
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_task_service] = lambda: mock_task_service
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_start_sync(client: TestClient, mock_task_service: MagicMock) -> None:
    mock_task_service.start_sync.return_value = "task-1"

    response = client.post("/api/sync")

    assert response.status_code == 202
    assert response.json() == {
        "task_id": "task-1",
        "message": "Syncing pages of project 'help-jp'...",
    }
    mock_task_service.start_sync.assert_called_once_with("help-jp")


def test_start_sync_workers_disabled(
    client: TestClient, mock_task_service: MagicMock, test_settings: Settings
) -> None:
    test_settings.WORKERS_ENABLED = False

    response = client.post("/api/sync")

    assert response.status_code == 503
    mock_task_service.start_sync.assert_not_called()


def test_list_tasks(client: TestClient, mock_task_service: MagicMock) -> None:
    mock_task_service.list_tasks.return_value = [
        Task(
            id="task-1",
            status="SUCCESS",
            completed_at="2024-01-01T00:00:00",
            metadata={"project": "help-jp"},
        )
    ]

    response = client.get("/api/tasks")

    assert response.status_code == 200
    assert response.json()[0]["id"] == "task-1"


def test_get_task_not_found(client: TestClient, mock_task_service: MagicMock) -> None:
    mock_task_service.get_task.side_effect = ResourceNotFoundException(
        ResourceType.TASK, "missing"
    )

    response = client.get("/api/tasks/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Task 'missing' not found"}


def test_terminate_task(client: TestClient, mock_task_service: MagicMock) -> None:
    response = client.post("/api/tasks/task-1/terminate")

    assert response.status_code == 202
    assert response.json() == {"message": "Terminating task task-1"}
    mock_task_service.terminate_task.assert_called_once_with("task-1")


@pytest.mark.parametrize(
    "headers, expected_detail",
    [
        ({}, "API key is missing"),
        ({"x-api-key": "wrong"}, "API key is invalid"),
    ],
)
def test_api_key_required(
    client: TestClient,
    mock_task_service: MagicMock,
    test_settings: Settings,
    headers: dict[str, str],
    expected_detail: str,
) -> None:
    test_settings.API_KEY = "secret"

    response = client.post("/api/sync", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"detail": expected_detail}
    mock_task_service.start_sync.assert_not_called()


def test_api_key_accepted(
    client: TestClient, mock_task_service: MagicMock, test_settings: Settings
) -> None:
    test_settings.API_KEY = "secret"
    mock_task_service.list_tasks.return_value = []

    response = client.get("/api/tasks", headers={"x-api-key": "secret"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize(
    "path", ["/api/sync", "/api/tasks/{task_id}/terminate"]
)
def test_worker_routes_document_service_unavailable(path: str) -> None:
    responses = app.openapi()["paths"][path]["post"]["responses"]

    assert "503" in responses
    assert responses["503"]["description"] == "Service unavailable"
