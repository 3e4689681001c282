import os

# must be set before storefront.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("IDENTITY_PROVIDER", "mock")

import pytest
from fastapi.testclient import TestClient

from storefront.db import init_db
from storefront.main import app


@pytest.fixture(autouse=True, scope="session")
def setup_db():
    init_db(reset=True)


@pytest.fixture
def client():
    # fresh cookie jar, so every test starts with its own guest cart
    return TestClient(app)
