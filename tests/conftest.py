import os
import sys

# ----------------------------------------------------------------------
# 1. Environment MUST be set before any imports happen
# ----------------------------------------------------------------------

os.environ.setdefault("ENV", "test")
os.environ.setdefault("TASKS_STORE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

import pytest
from fastapi.testclient import TestClient

from taskboard.main import create_app
from taskboard.models import TaskPayload
from taskboard.repository import InMemoryTaskRepository, JsonFileTaskRepository


@pytest.fixture
def repo():
    return InMemoryTaskRepository()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "task.json"


@pytest.fixture
def json_repo(store_path):
    return JsonFileTaskRepository(store_path)


@pytest.fixture
def client(repo):
    with TestClient(create_app(repo)) as c:
        yield c


@pytest.fixture
def make_payload():
    def _make(title="Tarefa de Teste", description="Testando o POST", status=None):
        return TaskPayload(title=title, description=description, status=status)
    return _make
