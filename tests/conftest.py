import pytest

from kudiguard.resolver import Answered, resolve
from kudiguard.state import FinancialSnapshot, ProfileFlags
from kudiguard.store import InMemoryDecisionStore


@pytest.fixture
def make_snapshot():
    def _factory(revenue=500_000, expenses=350_000, savings=400_000):
        return FinancialSnapshot(
            monthly_revenue=revenue,
            monthly_expenses=expenses,
            current_savings=savings,
        )

    return _factory


@pytest.fixture
def resolved():
    """Resolve a complete payload into evaluator inputs, failing if a field is still missing."""

    def _factory(intent, snapshot, question="", profile=None, **payload):
        resolution = resolve(intent, payload, snapshot, question, profile or ProfileFlags())
        assert isinstance(resolution, Answered), resolution
        return resolution.inputs

    return _factory


@pytest.fixture
def store(make_snapshot):
    store = InMemoryDecisionStore()
    store.add_snapshot("vendor-1", make_snapshot())
    store.set_profile("vendor-1", ProfileFlags())
    return store
