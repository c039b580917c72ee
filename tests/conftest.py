from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from basel_compliance.db.base import Base

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DATA_PATH = PROJECT_ROOT / "config" / "test_data" / "basel_test_data.yaml"

FAKE_PDF = b"%PDF-1.7\n% rendered by RecordingConverter\n%%EOF\n"


class RecordingConverter:
    """Stand-in for the browser: keeps the HTML, returns fixed bytes."""

    def __init__(self, result: bytes = FAKE_PDF, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[str] = []

    def convert(self, html: str) -> bytes:
        self.calls.append(html)
        if self.error is not None:
            raise self.error
        return self.result


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


# ---------------------------------------------------------------------------
# PDF template / renderer
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def dev_template(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Development AcroForm template built once per test session."""
    from basel_compliance.pdf.template_builder import build_dev_template

    return build_dev_template(tmp_path_factory.mktemp("templates") / "basel_form.pdf")


@pytest.fixture()
def converter() -> RecordingConverter:
    return RecordingConverter()


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


@pytest.fixture()
def client(
    db_session: Session,
    dev_template: Path,
    converter: RecordingConverter,
    monkeypatch: pytest.MonkeyPatch,
) -> TestClient:
    """TestClient with the database, template and converter overridden."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("TEST_DATA_PATH", str(TEST_DATA_PATH))
    monkeypatch.setenv("PDF_TEMPLATE_PATH", str(dev_template))

    from basel_compliance.core.settings import get_settings
    from basel_compliance.db.session import reset_engine

    get_settings.cache_clear()
    reset_engine()

    from basel_compliance.api.deps import get_acroform_filler, get_db, get_report_renderer
    from basel_compliance.api.main import app
    from basel_compliance.pdf.acroform_filler import AcroFormFiller
    from basel_compliance.reports.html_report import HtmlReportRenderer

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_acroform_filler] = lambda: AcroFormFiller(dev_template)
    app.dependency_overrides[get_report_renderer] = lambda: HtmlReportRenderer(converter)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
    reset_engine()
    get_settings.cache_clear()


@pytest.fixture()
def make_user(client: TestClient, db_session: Session):
    """Register and log in a user; returns the Authorization headers."""

    def _make(username: str, password: str = "correct-horse-battery", role: str = "user") -> dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "password": password, "email": f"{username}@example.org"},
        )
        assert response.status_code == 201, response.text
        if role != "user":
            from basel_compliance.db.repositories import UserRepository

            user = UserRepository(db_session).get_by_username(username)
            user.role = role
            db_session.flush()

        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _make


@pytest.fixture()
def alice(make_user) -> dict[str, str]:
    return make_user("alice")


@pytest.fixture()
def bob(make_user) -> dict[str, str]:
    return make_user("bob")


@pytest.fixture()
def admin(make_user) -> dict[str, str]:
    return make_user("root_admin", role="admin")


@pytest.fixture()
def notification_id(client: TestClient, alice: dict[str, str]) -> str:
    """Id of a notification in a fresh package owned by alice."""
    response = client.post("/api/packages", json={"title": "Lead-acid batteries"}, headers=alice)
    package_id = response.json()["data"]["id"]
    response = client.get(f"/api/notifications/package/{package_id}", headers=alice)
    return response.json()["data"]["id"]
