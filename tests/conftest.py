# tests/conftest.py
"""
Shared fixtures: in-memory SQLite engine, session and a target restaurant.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_import.models import Base, Restaurant


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


@pytest.fixture
def restaurant(session):
    restaurant = Restaurant(id="bagel-barn", name="Bagel Barn")
    session.add(restaurant)
    session.commit()
    return restaurant
