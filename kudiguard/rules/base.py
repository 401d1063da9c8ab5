"""
Shared pieces of the per-intent evaluators.

Every evaluator runs the same three tiers:

1. reject checks. Any hit ends the evaluation with REJECT.
2. strengths. Each met strength is one point toward APPROVE.
3. WAIT, the default, listing every unmet strength with its numeric gap.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from kudiguard.config import settings
from kudiguard.state import DecisionResult, FinancialSnapshot, Recommendation, ResolvedInputs

INFINITY = float("inf")


def ratio(numerator: float, denominator: float) -> float:
    """Expense-style ratio. A zero denominator gives 0."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def debt_ratio(debt: float, base: float) -> float:
    """Debt-style ratio. Positive debt over a zero base is infinitely risky."""
    if base <= 0:
        return INFINITY if debt > 0 else 0.0
    return debt / base


def money(amount: float) -> str:
    if amount == int(amount):
        return f"{settings.CURRENCY_SYMBOL}{amount:,.0f}"
    return f"{settings.CURRENCY_SYMBOL}{amount:,.2f}"


def pct(value: float) -> str:
    if math.isinf(value):
        return "unlimited"
    return f"{value:.1f}%"


def months(value: float) -> str:
    if math.isinf(value):
        return "unlimited"
    return f"{value:.1f}"


def unique(steps: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(steps))


@dataclass
class Signal:
    reason: str
    steps: Tuple[str, ...] = ()


@dataclass
class RuleBook:
    """Collects the tiered signals of one evaluation and turns them into a verdict."""

    snapshot: FinancialSnapshot
    inputs: ResolvedInputs
    rejections: List[Signal] = field(default_factory=list)
    strengths: List[Signal] = field(default_factory=list)
    gaps: List[Signal] = field(default_factory=list)
    blockers: List[Signal] = field(default_factory=list)
    cautions: List[Signal] = field(default_factory=list)
    notes: List[Signal] = field(default_factory=list)
    blocked: bool = False

    def reject(self, condition: bool, reason: str, *steps: str) -> bool:
        if condition:
            self.rejections.append(Signal(reason, steps))
        return condition

    def strength(self, condition: bool, met: str, gap: str,
                 steps: Sequence[str] = (), gap_steps: Sequence[str] = (),
                 blocking: bool = False) -> bool:
        """An approval point. With ``blocking`` an unmet strength also rules out APPROVE."""
        if condition:
            self.strengths.append(Signal(met, tuple(steps)))
        else:
            self.gaps.append(Signal(gap, tuple(gap_steps)))
            self.blocked = self.blocked or blocking
        return condition

    def blocker(self, condition: bool, reason: str, *steps: str) -> bool:
        if condition:
            self.blockers.append(Signal(reason, steps))
        return condition

    def caution(self, condition: bool, reason: str, *steps: str) -> bool:
        if condition:
            self.cautions.append(Signal(reason, steps))
        return condition

    def note(self, condition: bool, reason: str, *steps: str) -> bool:
        if condition:
            self.notes.append(Signal(reason, steps))
        return condition

    @property
    def rejected(self) -> bool:
        return bool(self.rejections)

    def verdict(
        self,
        required_strengths: int = 1,
        reject_steps: Sequence[str] = (),
        approve_steps: Sequence[str] = (),
        wait_steps: Sequence[str] = (),
        summaries: Tuple[str, str, str] = ("", "", ""),
    ) -> DecisionResult:
        """
        Decide in tier order. ``summaries`` holds the APPROVE, WAIT and REJECT headlines.

        APPROVE needs ``required_strengths`` met strengths, no blocker and no unmet
        blocking strength.
        """
        approve_summary, wait_summary, reject_summary = summaries

        if self.rejections:
            return self._result(
                Recommendation.REJECT, reject_summary,
                self.rejections, reject_steps,
            )

        if len(self.strengths) >= required_strengths and not (self.blockers or self.blocked):
            return self._result(
                Recommendation.APPROVE, approve_summary,
                self.strengths + self.notes, approve_steps,
            )

        signals = self.gaps + self.blockers + self.cautions + self.notes
        if not signals:
            signals = [Signal(
                "The current financial conditions suggest caution. While not immediately risky, "
                "there are areas to improve before this decision.",
                ("Review your business plan and financial projections before committing.",),
            )]
        return self._result(Recommendation.WAIT, wait_summary, signals, wait_steps)

    def _result(self, recommendation: Recommendation, summary: str,
                signals: Sequence[Signal], fixed_steps: Sequence[str]) -> DecisionResult:
        steps = [step for signal in signals for step in signal.steps]
        return DecisionResult(
            intent=self.inputs.intent,
            recommendation=recommendation,
            summary=summary,
            reasons=[signal.reason for signal in signals],
            actionable_steps=unique([*fixed_steps, *steps]),
            inputs=dict(self.inputs.values),
            financial_snapshot=self.snapshot,
        )
