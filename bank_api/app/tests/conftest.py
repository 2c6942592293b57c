import random
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core import db as db_module
from ..core.db import create_engine_for_url, get_session, set_engine
from ..main import app
from ..services import AccountNumberGenerator, SQLAccountStore


@pytest.fixture
def engine(tmp_path):
    engine = create_engine_for_url(
        f"sqlite:///{tmp_path / 'test.db'}", lock_timeout_seconds=30
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def number_generator() -> AccountNumberGenerator:
    return AccountNumberGenerator(1_000_000_000, random.Random(1234))


@pytest.fixture
def make_store(engine, number_generator):
    sessions: list[Session] = []

    def _make_store(generator=None, **kwargs) -> SQLAccountStore:
        session = Session(engine, expire_on_commit=False)
        sessions.append(session)
        return SQLAccountStore(session, generator or number_generator, **kwargs)

    yield _make_store

    for session in sessions:
        session.close()


@pytest.fixture
def open_account(make_store):
    """Create an account with a fixed number and starting balance."""

    def _open_account(number: int, balance: str = "0") -> int:
        store = make_store(generator=lambda: number)
        account_id = store.create_account("Test", f"Holder{number}")
        store.update_account_balance(account_id, number, Decimal(balance))
        return account_id

    return _open_account


@pytest.fixture
def client(engine) -> TestClient:
    original_engine = db_module.engine
    set_engine(engine)

    def _get_session_override():
        with Session(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)
