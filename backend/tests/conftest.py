"""
Pytest configuration and fixtures for backend tests.
"""

import itertools
import os

# The app's own engine is only touched by the lifespan; keep it off disk
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Ingredient, User, new_public_id
from shared.infrastructure.db import get_db
from shared.infrastructure.email import EmailMessage, get_email_sender
from shared.security.password import hash_password
from shared.utils.validators import normalize_name


_id_counter = itertools.count(1000)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class CapturingEmailSender:
    """EmailSender that keeps messages in memory; fails on demand."""

    def __init__(self):
        self.messages: list[EmailMessage] = []
        self.fail = False

    def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise ConnectionError("SMTP indisponível")
        self.messages.append(message)

    def last_token(self) -> str:
        """Token carried by the link of the last message."""
        return self.messages[-1].body.rsplit("token=", 1)[1]


def next_id():
    """Unique integer id for test users."""
    return next(_id_counter)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    return CapturingEmailSender()


@pytest.fixture(scope="function")
def client(db_session, mailer):
    """
    Create a test client with database session and email overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _make_user(db_session, email: str, password: str, admin: bool, nome: str) -> User:
    user = User(
        id=next_id(),
        nome=nome,
        email=email,
        password=hash_password(password),
        admin=admin,
        is_active=True,
        email_verificado=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_admin_user(db_session):
    """Active, verified administrator."""
    return _make_user(db_session, "admin@test.com", "testpass123", True, "Admin Teste")


@pytest.fixture
def seed_regular_user(db_session):
    """Active, verified user without admin rights."""
    return _make_user(db_session, "chef@test.com", "chef123", False, "Chef Teste")


def _login(client, email: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get authentication headers for an admin."""
    return _login(client, "admin@test.com", "testpass123")


@pytest.fixture
def user_auth_headers(client, seed_regular_user):
    """Get authentication headers for a regular user."""
    return _login(client, "chef@test.com", "chef123")


@pytest.fixture
def make_ingredient(db_session):
    """Factory inserting an ingredient directly."""

    def _make(
        alimento: str,
        preco: float,
        peso: str = "1",
        fator_correcao: float = 1.0,
        unidade: str = "kg",
        ativo: bool = True,
        **extra,
    ) -> Ingredient:
        ingredient = Ingredient(
            id=new_public_id(),
            alimento=alimento,
            nome_chave=normalize_name(alimento),
            unidade=unidade,
            preco=preco,
            peso=peso,
            fator_correcao=fator_correcao,
            is_active=ativo,
            **extra,
        )
        db_session.add(ingredient)
        db_session.commit()
        db_session.refresh(ingredient)
        return ingredient

    return _make
