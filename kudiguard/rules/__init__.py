"""One evaluator per intent, looked up through ``EVALUATORS``."""

from typing import Callable, Dict

from kudiguard.rules import (
    business_expansion,
    equipment,
    hiring,
    inventory,
    loan_management,
    marketing,
    savings,
)
from kudiguard.state import DecisionResult, FinancialSnapshot, Intent, ResolvedInputs

Evaluator = Callable[[FinancialSnapshot, ResolvedInputs], DecisionResult]

EVALUATORS: Dict[Intent, Evaluator] = {
    Intent.HIRING: hiring.evaluate,
    Intent.INVENTORY: inventory.evaluate,
    Intent.MARKETING: marketing.evaluate,
    Intent.SAVINGS: savings.evaluate,
    Intent.EQUIPMENT: equipment.evaluate,
    Intent.LOAN_MANAGEMENT: loan_management.evaluate,
    Intent.BUSINESS_EXPANSION: business_expansion.evaluate,
}


def evaluate(snapshot: FinancialSnapshot, inputs: ResolvedInputs) -> DecisionResult:
    return EVALUATORS[inputs.intent](snapshot, inputs)
