import os
from datetime import date
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from skimatch.api import deps
from skimatch.api.routes import availability, listings, recurring
from skimatch.db import models
from skimatch.db.session import Base, get_db
from skimatch.repositories.availability import SqlAvailabilityRepository

TODAY = date(2024, 1, 1)


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repo(db_session):
    return SqlAvailabilityRepository(db_session)


@pytest.fixture()
def api_client():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    test_app = FastAPI()
    test_app.include_router(listings.router, prefix="/api/v1")
    test_app.include_router(recurring.router, prefix="/api/v1")
    test_app.include_router(availability.router, prefix="/api/v1")
    test_app.dependency_overrides[get_db] = override_get_db
    test_app.dependency_overrides[deps.get_today] = lambda: TODAY

    with TestClient(test_app) as client:
        yield client, TestingSessionLocal

    test_app.dependency_overrides.clear()


def make_rule(
    rule_id=1,
    *,
    teacher_id="teacher-1",
    day_of_week=1,
    start_time="09:00",
    end_time="11:00",
    start_date=date(2024, 1, 1),
    end_date=date(2024, 1, 31),
    skill=models.SportSkill.snowboarding,
    price=Decimal("60.00"),
    location="Whistler",
):
    return models.RecurrenceRule(
        id=rule_id,
        teacher_id=teacher_id,
        day_of_week=day_of_week,
        start_time=start_time,
        end_time=end_time,
        start_date=start_date,
        end_date=end_date,
        location=location,
        price=price,
        skill=skill,
    )


def make_listing(
    listing_id=1,
    *,
    teacher_id="teacher-1",
    day=date(2024, 2, 1),
    start_time="09:00",
    end_time="11:00",
    skill=models.SportSkill.snowboarding,
    price=Decimal("50.00"),
    location="Whistler",
):
    return models.SingleListing(
        id=listing_id,
        teacher_id=teacher_id,
        date=day,
        start_time=start_time,
        end_time=end_time,
        location=location,
        price=price,
        skill=skill,
    )
