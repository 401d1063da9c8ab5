"""Persistence collaborator the service reads snapshots from and saves decisions to."""

import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, List, Optional

from kudiguard.state import DecisionResult, FinancialSnapshot, ProfileFlags


class DecisionStore(ABC):
    """Interface for the external datastore. Implementations may raise on I/O failure."""

    @abstractmethod
    def fetch_latest_snapshot(self, user_id: str) -> Optional[FinancialSnapshot]:
        ...

    @abstractmethod
    def fetch_profile(self, user_id: str) -> Optional[ProfileFlags]:
        ...

    @abstractmethod
    def save_decision(self, user_id: str, question: str, result: DecisionResult) -> str:
        ...


class InMemoryDecisionStore(DecisionStore):
    def __init__(self):
        self.snapshots: Dict[str, List[FinancialSnapshot]] = defaultdict(list)
        self.profiles: Dict[str, ProfileFlags] = {}
        self.decisions: List[Dict[str, Any]] = []

    def add_snapshot(self, user_id: str, snapshot: FinancialSnapshot) -> None:
        self.snapshots[user_id].append(snapshot)

    def set_profile(self, user_id: str, profile: ProfileFlags) -> None:
        self.profiles[user_id] = profile

    def fetch_latest_snapshot(self, user_id: str) -> Optional[FinancialSnapshot]:
        history = self.snapshots.get(user_id)
        return history[-1] if history else None

    def fetch_profile(self, user_id: str) -> Optional[ProfileFlags]:
        return self.profiles.get(user_id)

    def save_decision(self, user_id: str, question: str, result: DecisionResult) -> str:
        decision_id = str(uuid.uuid4())
        self.decisions.append({
            "id": decision_id,
            "user_id": user_id,
            "question": question,
            "decision_type": result.intent.value,
            "recommendation": result.recommendation.value,
            "result": result,
        })
        return decision_id
