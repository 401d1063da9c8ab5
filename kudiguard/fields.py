"""
Per-intent catalog of the inputs the engine may ask for.

Fields are declared in the order they are asked. A conditional field comes after
every field its trigger reads, so a trigger only ever sees values that are
already known or already defaulted.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from kudiguard.state import FieldType, FinancialSnapshot, Intent, ProfileFlags

TREND_OPTIONS = ("consistent_growth", "positive_fluctuating", "declining_unstable")

POWER_KEYWORDS = ("generator", "solar", "inverter", "power")
BULK_KEYWORDS = ("bulk", "discount", "wholesale")
FESTIVE_KEYWORDS = ("festive", "christmas", "easter", "sallah", "eid", "holiday", "peak season")
MAX_TERM_MONTHS = 360


@dataclass(frozen=True)
class FieldContext:
    """Read-only view handed to trigger and default predicates."""

    intent: Intent
    payload: Mapping[str, Any]
    snapshot: FinancialSnapshot
    profile: ProfileFlags
    question: str = ""

    def known(self, name: str) -> bool:
        return self.payload.get(name) is not None

    def value(self, name: str) -> Any:
        """
        The known value of ``name`` while its trigger holds, otherwise its default.

        A caller-supplied answer to a field that was never triggered is ignored,
        except for presumed fields, which are never asked but may be stated.
        """
        spec = field_spec(self.intent, name)
        if self.known(name) and (spec.presumed or spec.trigger(self)):
            return self.payload[name]
        return spec.default(self)

    def mentions(self, *keywords: str) -> bool:
        text = self.question.lower()
        return any(keyword in text for keyword in keywords)


def always(ctx: FieldContext) -> bool:
    return True


def never(ctx: FieldContext) -> bool:
    return False


def no_default(ctx: FieldContext) -> Any:
    return None


@dataclass(frozen=True)
class FieldSpec:
    name: str
    prompt: str
    type: FieldType = "number"
    can_be_zero_or_none: bool = True
    options: Optional[Tuple[str, ...]] = None
    minimum: Optional[float] = 0
    maximum: Optional[float] = None
    trigger: Callable[[FieldContext], bool] = always
    default: Callable[[FieldContext], Any] = no_default
    presumed: bool = False

    def is_answered(self, value: Any) -> bool:
        if value is None:
            return False
        if self.type == "number" and not self.can_be_zero_or_none:
            return value > 0
        return True


def _number(name, prompt, positive=False, **kwargs) -> FieldSpec:
    return FieldSpec(name, prompt, "number", can_be_zero_or_none=not positive, **kwargs)


def _percentage(name, prompt, **kwargs) -> FieldSpec:
    return FieldSpec(name, prompt, "number", maximum=100, **kwargs)


def _boolean(name, prompt, **kwargs) -> FieldSpec:
    return FieldSpec(name, prompt, "boolean", minimum=None, **kwargs)


def _trend(name, prompt, **kwargs) -> FieldSpec:
    return FieldSpec(name, prompt, "enum", options=TREND_OPTIONS, minimum=None, **kwargs)


HIRING_FIELDS = (
    _number("estimated_salary",
            "What is the estimated monthly salary for the new hire (in ₦)?", positive=True),
)

INVENTORY_FIELDS = (
    _number("estimated_inventory_cost",
            "What is the estimated cost of the new inventory you want to purchase (in ₦)?", positive=True),
    _number("inventory_turnover_days",
            "What is your average inventory turnover in days (how long it takes to sell all your stock)?"),
    _number("outstanding_supplier_debts",
            "What is your total outstanding debt to suppliers (in ₦)?"),
    _number("supplier_credit_terms_days",
            "What are your supplier's credit terms in days (how long do you have to pay)?",
            trigger=lambda ctx: ctx.profile.is_fmcg_vendor),
    _number("average_receivables_turnover_days",
            "What is your average receivables turnover in days (how long customers take to pay you)?",
            trigger=lambda ctx: ctx.profile.is_fmcg_vendor),
    _percentage("supplier_discount_percentage",
                "What discount is the supplier offering on this order, as a percentage (e.g., '15' for 15%)?",
                trigger=lambda ctx: ctx.mentions(*BULK_KEYWORDS)),
    _percentage("storage_cost_percentage_of_order",
                "What is the estimated storage cost for this bulk order as a percentage of the order value "
                "(e.g., '5' for 5%)?",
                trigger=lambda ctx: ctx.value("supplier_discount_percentage") is not None),
)

MARKETING_FIELDS = (
    _number("proposed_marketing_budget",
            "How much do you plan to spend on this marketing campaign (in ₦)?", positive=True),
    _number("total_outstanding_debts",
            "What is the total amount your business currently owes, including supplier debts and loans (in ₦)?"),
    _boolean("is_localized_promotion",
             "Is this a local promotion targeting customers around your shop or market? (true/false)"),
    _boolean("historic_foot_traffic_increase_observed",
             "Have you seen foot traffic increase after similar local promotions before? (true/false)",
             trigger=lambda ctx: ctx.value("is_localized_promotion") is True,
             default=lambda ctx: False),
    _boolean("has_run_previous_campaigns",
             "Have you run at least two marketing campaigns before? (true/false)"),
    _number("sales_increase_last_campaign_1",
            "By what percentage did sales increase after your most recent campaign (e.g., '12' for 12%)?",
            trigger=lambda ctx: ctx.value("has_run_previous_campaigns") is True),
    _number("sales_increase_last_campaign_2",
            "By what percentage did sales increase after the campaign before that?",
            trigger=lambda ctx: ctx.value("has_run_previous_campaigns") is True),
    _boolean("is_festive_or_peak_season",
             "Is this campaign planned for a festive or peak sales season? (true/false)",
             trigger=never,
             default=lambda ctx: ctx.mentions(*FESTIVE_KEYWORDS),
             presumed=True),
)


def _savings_target_months(ctx: FieldContext) -> int:
    return 6 if ctx.value("is_volatile_industry") else 3


SAVINGS_FIELDS = (
    _number("proposed_savings_amount",
            "How much do you want to set aside into savings each month (in ₦)?", positive=True),
    _boolean("is_volatile_industry",
             "Is your business in a volatile industry where sales swing a lot from month to month? (true/false)"),
    _number("consecutive_negative_cash_flow_months",
            "For how many consecutive recent months has more cash gone out than come in? (0 if none)"),
    _number("outstanding_debts",
            "What is the total amount your business currently owes (in ₦)? (0 if none)"),
    _percentage("debt_apr",
                "What is the annual interest rate (APR, %) on your most expensive debt?",
                trigger=lambda ctx: (ctx.value("outstanding_debts") or 0) > 0,
                default=lambda ctx: 0),
    _boolean("is_seasonal_windfall_month",
             "Is this an unusually strong sales month for you (a seasonal windfall)? (true/false)"),
    _boolean("is_growth_stage",
             "Is your business actively growing and in need of reinvestment? (true/false)",
             trigger=lambda ctx: ctx.snapshot.savings_buffer_months >= _savings_target_months(ctx),
             default=lambda ctx: False),
)


def _power_solution(ctx: FieldContext) -> bool:
    return ctx.mentions(*POWER_KEYWORDS)


EQUIPMENT_FIELDS = (
    _number("estimated_equipment_cost",
            "What is the estimated cost of the equipment (in ₦)?", positive=True),
    _boolean("is_critical_replacement",
             "Is this equipment a critical replacement for something broken that currently stops or severely "
             "impedes core business operations? (true/false)"),
    _number("expected_revenue_increase_monthly",
            "How much do you expect this equipment to increase your monthly revenue (in ₦)?"),
    _number("expected_expense_decrease_monthly",
            "How much do you expect this equipment to decrease your monthly expenses (in ₦)?"),
    _number("existing_debt_load_monthly_repayments",
            "What are your total monthly repayments for existing business loans or significant debts (in ₦)?"),
    _boolean("is_power_solution",
             "Is this equipment a power solution such as a generator, inverter or solar system? (true/false)",
             trigger=never,
             default=_power_solution,
             presumed=True),
    _number("current_energy_cost_monthly",
            "What is your current average monthly energy cost (in ₦)?",
            trigger=lambda ctx: ctx.value("is_power_solution") is True,
            default=lambda ctx: 0),
    _boolean("has_diversified_revenue_streams",
             "Does your business have at least two distinct, significant revenue streams? (true/false)",
             trigger=lambda ctx: ctx.value("estimated_equipment_cost") > 1_000_000,
             default=lambda ctx: True),
    _boolean("financing_required",
             "Will you need external financing (e.g., a loan) for this purchase? (true/false)",
             trigger=lambda ctx: ctx.value("estimated_equipment_cost") > 0.5 * ctx.snapshot.current_savings,
             default=lambda ctx: False),
    _percentage("financing_interest_rate_annual_percentage",
                "What is the estimated annual interest rate (%) for the financing?",
                trigger=lambda ctx: ctx.value("financing_required") is True,
                default=lambda ctx: 0),
    _number("financing_term_months",
            "What is the estimated loan term in months for the financing?", positive=True,
            maximum=MAX_TERM_MONTHS,
            trigger=lambda ctx: ctx.value("financing_required") is True),
)

LOAN_MANAGEMENT_FIELDS = (
    _number("proposed_loan_amount",
            "How much do you want to borrow (in ₦)?", positive=True),
    _number("loan_term_months",
            "Over how many months would you repay the loan?", positive=True, maximum=MAX_TERM_MONTHS),
    _percentage("debt_apr",
                "What annual interest rate (APR, %) is the lender offering?"),
    _number("total_monthly_debt_repayments",
            "What are your current total monthly repayments on existing debts (in ₦)? (0 if none)"),
    _number("total_business_liabilities",
            "What is the total of everything your business owes (in ₦)?"),
    _number("total_business_assets",
            "What is the total value of everything your business owns, including stock, equipment and cash (in ₦)?"),
    _boolean("loan_purpose_is_revenue_generating",
             "Will the loan be used for something that directly generates revenue, like stock or equipment? "
             "(true/false)"),
    _number("consecutive_negative_cash_flow_months",
            "For how many consecutive recent months has more cash gone out than come in? (0 if none)"),
)

BUSINESS_EXPANSION_FIELDS = (
    _number("expansion_cost",
            "What is the total estimated cost of the expansion (in ₦)?", positive=True),
    _number("capital_available_percentage_of_cost",
            "What percentage of the expansion cost do you already have available (e.g., '75' for 75%)?"),
    _trend("revenue_growth_trend",
           "How would you describe your revenue over the last six months?"),
    _boolean("profit_growth_consistent_6_months",
             "Has your profit grown consistently for the last six months? (true/false)",
             trigger=lambda ctx: ctx.value("revenue_growth_trend") == "consistent_growth",
             default=lambda ctx: False),
    _trend("profit_margin_trend",
           "How would you describe your profit margin over the last six months?"),
    _boolean("market_research_validates_demand",
             "Has market research (customer surveys, waiting lists, competitor checks) confirmed demand in the "
             "new location or product line? (true/false)"),
)

CATALOG: Dict[Intent, Tuple[FieldSpec, ...]] = {
    Intent.HIRING: HIRING_FIELDS,
    Intent.INVENTORY: INVENTORY_FIELDS,
    Intent.MARKETING: MARKETING_FIELDS,
    Intent.SAVINGS: SAVINGS_FIELDS,
    Intent.EQUIPMENT: EQUIPMENT_FIELDS,
    Intent.LOAN_MANAGEMENT: LOAN_MANAGEMENT_FIELDS,
    Intent.BUSINESS_EXPANSION: BUSINESS_EXPANSION_FIELDS,
}

_BY_NAME: Dict[Intent, Dict[str, FieldSpec]] = {
    intent: {spec.name: spec for spec in specs} for intent, specs in CATALOG.items()
}


def fields_for(intent: Intent) -> Tuple[FieldSpec, ...]:
    return CATALOG[intent]


def field_spec(intent: Intent, name: str) -> FieldSpec:
    try:
        return _BY_NAME[intent][name]
    except KeyError:
        raise KeyError(f"{name!r} is not a {intent.value} field") from None
