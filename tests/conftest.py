import os

# configure before any project module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("RATE_CALCULATOR_RATE_LIMIT", "1000/minute")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import DBBase, init_models
from modules.rate_card.rate_card_store import InMemoryRateCardStore
from modules.serviceability.pincode_directory import InMemoryPincodeDirectory
from modules.serviceability.serviceability_service import ServiceabilityService
from tests.factories import LOCALITY_PINCODES, PINCODES, make_entry


@pytest.fixture
def directory():
    return InMemoryPincodeDirectory(PINCODES)


@pytest.fixture
def serviceability(directory):
    return ServiceabilityService(directory)


@pytest.fixture
def locality_serviceability():
    return ServiceabilityService(InMemoryPincodeDirectory(LOCALITY_PINCODES))


@pytest.fixture
def store():
    return InMemoryRateCardStore([make_entry()])


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_models(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    DBBase.metadata.drop_all(bind=engine)
    engine.dispose()
