"""
Pytest configuration and shared fixtures for backend tests.
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from clearpath.engine.models import AdditionalFactors, Case, PersonalInfo, Sentence
from clearpath.knowledge import DC_JURISDICTION
from clearpath.main import app

# Every evaluation in the suite is pinned to this date.
AS_OF = date(2026, 6, 1)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def dc():
    return DC_JURISDICTION


@pytest.fixture
def as_of():
    return AS_OF


def make_case(**overrides) -> Case:
    """A completed misdemeanor conviction with sensible defaults."""
    completed = overrides.pop("completed_on", date(2010, 1, 15))
    fields = dict(
        offense_id="theft_second_degree",
        offense_date=date(2008, 6, 1),
        outcome="convicted",
        sentence=Sentence(probation_months=12, all_completed=True),
        completion_date=completed,
        age_at_offense=30,
        case_number="2008 CMD 001234",
    )
    fields.update(overrides)
    return Case(**fields)


def no_factors(**overrides) -> AdditionalFactors:
    return AdditionalFactors(**overrides)


def make_person(**overrides) -> PersonalInfo:
    fields = dict(
        first_name="Jordan",
        last_name="Rivera",
        date_of_birth=date(1985, 3, 9),
        address="1200 U Street NW, Washington, DC 20009",
    )
    fields.update(overrides)
    return PersonalInfo(**fields)
