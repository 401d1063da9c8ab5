from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Intent(str, Enum):
    HIRING = "hiring"
    INVENTORY = "inventory"
    MARKETING = "marketing"
    SAVINGS = "savings"
    EQUIPMENT = "equipment"
    LOAN_MANAGEMENT = "loan_management"
    BUSINESS_EXPANSION = "business_expansion"


class Recommendation(str, Enum):
    APPROVE = "APPROVE"
    WAIT = "WAIT"
    REJECT = "REJECT"


FieldType = Literal["number", "boolean", "enum"]


class FinancialSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_revenue: float = Field(ge=0, description="Latest reported monthly revenue")
    monthly_expenses: float = Field(ge=0, description="Latest reported monthly expenses")
    current_savings: float = Field(ge=0, description="Cash currently held in savings")

    @property
    def net_income(self) -> float:
        return self.monthly_revenue - self.monthly_expenses

    @property
    def profit_margin(self) -> float:
        """Net income as a percentage of revenue, 0 when there is no revenue."""
        if self.monthly_revenue <= 0:
            return 0.0
        return self.net_income / self.monthly_revenue * 100

    @property
    def savings_buffer_months(self) -> float:
        """Months of expenses covered by savings, infinite when there are no expenses."""
        if self.monthly_expenses <= 0:
            return float("inf")
        return self.current_savings / self.monthly_expenses


class ProfileFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_fmcg_vendor: bool = Field(default=False, description="Sells fast-moving consumer goods")
    business_type: Optional[str] = Field(default=None, description="Free-text business classification")


class DataNeeded(BaseModel):
    """The single question to put to the user before a decision can be made."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str
    prompt: str
    type: FieldType
    options: Optional[List[str]] = None
    can_be_zero_or_none: bool = Field(alias="canBeZeroOrNone")
    payload_so_far: Dict[str, Any] = Field(default_factory=dict, alias="payloadSoFar")
    intent: Intent


class ResolvedInputs(BaseModel):
    """Every catalog field of an intent, answered or defaulted."""

    model_config = ConfigDict(frozen=True)

    intent: Intent
    values: Dict[str, Any]

    def __getitem__(self, name: str) -> Any:
        return self.values[name]


class DecisionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: Intent
    recommendation: Recommendation
    summary: str
    reasons: List[str]
    actionable_steps: List[str]
    inputs: Dict[str, Any]
    financial_snapshot: FinancialSnapshot


class DecisionRequest(BaseModel):
    """Inbound turn of a decision conversation."""

    intent: Optional[Intent] = None
    question: str = Field(min_length=1)
    payload: Dict[str, Any] = Field(default_factory=dict)


class DecisionState(BaseModel):
    intent: Intent
    question: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    snapshot: FinancialSnapshot
    profile: ProfileFlags = Field(default_factory=ProfileFlags)

    normalized_payload: Optional[Dict[str, Any]] = None
    data_needed: Optional[DataNeeded] = None
    resolved_inputs: Optional[ResolvedInputs] = None
    decision: Optional[DecisionResult] = None
