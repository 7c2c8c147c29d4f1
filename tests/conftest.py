import os

# SQLite pour les tests AVANT d'importer l'app
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import tasklinks.core.database
tasklinks.core.database.engine = test_engine
tasklinks.core.database.SessionLocal = TestingSessionLocal

from tasklinks.core.database import Base, get_db
from tasklinks.main import app
from tasklinks.models.column import BoardColumn
from tasklinks.models.project import Project
from tasklinks.models.task import Task
from tasklinks.models.user import User
from tasklinks.routers.task_links import get_event_sink
from tasklinks.services.relation_service import seed_default_relations
from tasklinks.services.task_link_service import TaskLinkService


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


class RecordingEventSink:
    """Garde les événements publiés dans l'ordre"""

    def __init__(self):
        self.published = []

    def publish(self, event_name, payload):
        self.published.append((event_name, payload))


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def events():
    return RecordingEventSink()


@pytest.fixture
def client(events):
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    app.dependency_overrides[get_event_sink] = lambda: events
    yield TestClient(app)
    app.dependency_overrides.pop(get_event_sink, None)


@pytest.fixture
def relations(db):
    """Catalogue par défaut (relates to, blocks/is blocked by, ...)"""
    seed_default_relations(db)


@pytest.fixture
def service(db, events, relations):
    return TaskLinkService(db, events, publish_on_remove=False)


@pytest.fixture
def board(db):
    """
    Deux projets avec leurs colonnes et un user.

    Retourne un dict avec les ids utiles pour créer des tâches.
    """
    project_a = Project(name="Projet A")
    project_b = Project(name="Projet B")
    db.add_all([project_a, project_b])
    db.commit()

    todo = BoardColumn(project_id=project_a.id, title="Todo", position=1)
    done = BoardColumn(project_id=project_a.id, title="Done", position=5)
    backlog_b = BoardColumn(project_id=project_b.id, title="Backlog", position=1)
    db.add_all([todo, done, backlog_b])

    alice = User(username="alice", name="Alice Martin")
    db.add(alice)
    db.commit()

    return {
        "project_a": project_a.id,
        "project_b": project_b.id,
        "todo": todo.id,
        "done": done.id,
        "backlog_b": backlog_b.id,
        "alice": alice.id,
    }


@pytest.fixture
def make_task(db):
    """Factory: crée une tâche et la retourne"""
    def _make_task(title, project_id, column_id, **kwargs):
        task = Task(title=title, project_id=project_id, column_id=column_id, **kwargs)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    return _make_task
