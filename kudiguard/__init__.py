"""KudiGuard: rule-based financial decisions for small vendors."""

from kudiguard.errors import (
    InputValidationError,
    InvariantViolationError,
    KudiGuardError,
    PersistenceError,
    UpstreamDataMissingError,
)
from kudiguard.intents import detect_intent
from kudiguard.main import DecisionOutcome, decide, decision_app
from kudiguard.service import DecisionService
from kudiguard.state import (
    DataNeeded,
    DecisionResult,
    FinancialSnapshot,
    Intent,
    ProfileFlags,
    Recommendation,
)
from kudiguard.store import DecisionStore, InMemoryDecisionStore

__version__ = "1.0.0"

__all__ = [
    "DataNeeded",
    "DecisionOutcome",
    "DecisionResult",
    "DecisionService",
    "DecisionStore",
    "FinancialSnapshot",
    "InMemoryDecisionStore",
    "InputValidationError",
    "Intent",
    "InvariantViolationError",
    "KudiGuardError",
    "PersistenceError",
    "ProfileFlags",
    "Recommendation",
    "UpstreamDataMissingError",
    "decide",
    "decision_app",
    "detect_intent",
]
