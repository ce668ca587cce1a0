"""Shared test helpers: isolated settings, SQLite session factories and an API test case."""

import tempfile
import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import build_engine, get_db
from app.main import app
from app.models import Base, Role
from app.schemas.user import UserCreate, UserOut
from app.services.users import create_user

DEFAULT_PASSWORD = "correct-horse-1"


def make_settings(**overrides: object) -> Settings:
    """Settings independent of the developer's environment and .env file."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret-key-with-enough-entropy",
        "JWT_EXPIRE_MINUTES": 1440,
        "ADMIN_USERNAME": "admin",
        "ADMIN_PASSWORD": "",
        "REPORT_TIMEZONE": "Asia/Jakarta",
        "UPLOAD_DIR": tempfile.gettempdir(),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory(database_url: str = "sqlite://") -> sessionmaker:
    """Create the schema in a fresh database and return a session factory bound to it."""
    if database_url == "sqlite://":
        engine = build_engine(database_url, poolclass=StaticPool)
    else:
        engine = build_engine(database_url, connect_args={"timeout": 30})
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    db: Session,
    username: str,
    role: Role = Role.USER,
    password: str = DEFAULT_PASSWORD,
    **profile: str,
) -> UserOut:
    return create_user(
        db,
        UserCreate(username=username, role=role.value, password=password, **profile),
    )


class ApiTestCase(unittest.TestCase):
    """Runs the real app against an in-memory database and a temporary upload directory."""

    def setUp(self) -> None:
        self._upload_dir = tempfile.TemporaryDirectory()
        self.settings = make_settings(UPLOAD_DIR=self._upload_dir.name)
        self.session_factory = make_session_factory()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app)
        self.prefix = self.settings.API_PREFIX

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.session_factory.kw["bind"].dispose()
        self._upload_dir.cleanup()

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def add_user(self, username: str, role: Role = Role.USER, **kwargs: str) -> UserOut:
        db = self.session_factory()
        try:
            return add_user(db, username, role=role, **kwargs)
        finally:
            db.close()

    def login(self, username: str, password: str = DEFAULT_PASSWORD) -> str:
        resp = self.client.post(
            self.url("/login"), json={"username": username, "password": password}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def auth(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
