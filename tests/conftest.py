"""Pytest configuration and fixtures."""

import io
import os
import tempfile

# Uploaded files go to a throwaway directory; must be set before settings load
_media_root = tempfile.mkdtemp(prefix="cookbook-tests-")
os.environ.setdefault("STATIC_DIR", os.path.join(_media_root, "public"))
os.environ.setdefault("UPLOAD_TMP_DIR", os.path.join(_media_root, "tmp"))
os.environ.setdefault("SMTP_HOST", "")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from cookbook.database import Base, create_db_engine, get_db  # noqa: E402
from cookbook.main import app  # noqa: E402
from cookbook.models import Category, Ingredient, Recipe  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and the raw token."""

    def __init__(self, *args, user_id: int | None = None, token: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.token = token


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/cookbook", "/cookbook_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "Passw0rd"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, name: str, email: str, password: str = PASSWORD) -> AuthHeaders:
    response = client.post(
        "/users/register", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    data = response.json()
    token = data["token"]
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"}, user_id=data["user"]["id"], token=token
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "alice", "alice@example.com")


@pytest.fixture
def second_user_headers(client):
    """Create a second user for ownership checks."""
    return register(client, "bob", "bob@example.com")


@pytest.fixture
def make_recipe(db):
    """Factory inserting recipes directly; catalog recipes by default."""

    def _make(title: str = "Pancakes", category: str = "Breakfast", owner_id=None, **fields):
        recipe = Recipe(
            title=title,
            category=category,
            area=fields.get("area", "American"),
            instructions=fields.get("instructions", "Mix and fry."),
            description=fields.get("description", f"{title} description"),
            thumb=fields.get("thumb", f"https://img.example.com/{title}.jpg"),
            time=fields.get("time", "20"),
            tags=fields.get("tags", []),
            ingredients=fields.get("ingredients", [{"id": "flour", "measure": "200 g"}]),
            owner_id=owner_id,
        )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make


@pytest.fixture
def reference_data(db):
    """Seed a few categories and ingredients."""
    db.add_all(
        [
            Category(id="c-breakfast", title="Breakfast", description="Morning food"),
            Category(id="c-desserts", title="Desserts", description="Sweet things"),
            Ingredient(id="flour", title="Flour", thumb="https://img.example.com/flour.png"),
            Ingredient(id="eggs", title="Eggs", thumb="https://img.example.com/eggs.png"),
        ]
    )
    db.commit()


def png_bytes(size=(40, 30), color=(200, 30, 30, 255)) -> bytes:
    """A small in-memory PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def register_user(client):
    """Register an extra user and return their auth headers."""

    def _register(name: str, email: str, password: str = PASSWORD) -> AuthHeaders:
        return register(client, name, email, password)

    return _register


@pytest.fixture
def png_image():
    return png_bytes
