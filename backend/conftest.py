"""Shared fixtures: a fresh SQLite file per test and helpers to populate it."""
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from bloodbank.api.deps import get_db
from bloodbank.db.init_db import init_db
from bloodbank.db.session import build_engine
from bloodbank.main import app
from bloodbank.services import registry_service, stock_service


@pytest.fixture
def engine(tmp_path):
    """File-backed so that each thread's session gets its own connection."""
    engine = build_engine(f"sqlite:///{tmp_path / 'bloodbank_test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_donor(db):
    counter = {"n": 0}

    def _make(blood_group="O+", **overrides):
        counter["n"] += 1
        fields = {
            "name": f"Donor {counter['n']}",
            "age": 30,
            "gender": "Male",
            "blood_group": blood_group,
            "contact": f"98765{counter['n']:05d}",
            "address": "Delhi",
        }
        fields.update(overrides)
        return registry_service.register_donor(db, **fields)

    return _make


@pytest.fixture
def make_recipient(db):
    counter = {"n": 0}

    def _make(blood_group_required="O+", **overrides):
        counter["n"] += 1
        fields = {
            "name": f"Recipient {counter['n']}",
            "age": 40,
            "gender": "Female",
            "blood_group_required": blood_group_required,
            "contact": f"91234{counter['n']:05d}",
            "address": "Kolkata",
        }
        fields.update(overrides)
        return registry_service.register_recipient(db, **fields)

    return _make


@pytest.fixture
def stock(db):
    def _set(blood_group, units):
        return stock_service.set_stock(db, blood_group, units)

    return _set


@pytest.fixture
def request_date():
    return date(2025, 8, 10)
