import argparse
from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional

from langgraph.graph import StateGraph, END

from kudiguard.errors import InvariantViolationError
from kudiguard.logger import get_logger
from kudiguard.normalize import normalize_payload
from kudiguard.resolver import Answered, resolve
from kudiguard.rules import EVALUATORS
from kudiguard.state import (
    DataNeeded,
    DecisionResult,
    DecisionState,
    FinancialSnapshot,
    Intent,
    ProfileFlags,
)

logger = get_logger("kudiguard.engine")

# -------------------------------------
# Node Functions
# -------------------------------------

def normalize_inputs(state: DecisionState):
    """Coerce the answers so far into typed values and drop fields the intent does not use."""
    logger.debug("--- Node: Normalize Payload ---")
    return {"normalized_payload": normalize_payload(state.intent, state.payload)}


def resolve_fields(state: DecisionState):
    """Ask for the next missing field, or hand the complete inputs to the evaluator."""
    logger.debug("--- Node: Resolve Fields ---")

    resolution = resolve(
        state.intent,
        state.normalized_payload or {},
        state.snapshot,
        state.question,
        state.profile,
    )
    if isinstance(resolution, Answered):
        return {"resolved_inputs": resolution.inputs}

    logger.info("Data needed for %s: %s", state.intent.value, resolution.data_needed.field)
    return {"data_needed": resolution.data_needed}


def evaluate_rules(state: DecisionState):
    """Run the intent's rule evaluator over the resolved inputs."""
    logger.debug("--- Node: Evaluate Rules ---")

    evaluator = EVALUATORS[state.intent]
    try:
        decision = evaluator(state.snapshot, state.resolved_inputs)
    except (KeyError, TypeError) as e:
        logger.exception("Evaluator for %s failed on resolved inputs", state.intent.value)
        raise InvariantViolationError(
            f"Critical {state.intent.value} data is missing after collection.",
            f"{type(e).__name__}: {e}",
        ) from e

    logger.info(
        "Decision made for %s - Recommendation: %s",
        state.intent.value, decision.recommendation.value,
    )
    return {"decision": decision}


def route_after_resolve(state: DecisionState) -> Literal["ask", "evaluate"]:
    return "ask" if state.data_needed is not None else "evaluate"


# -------------------------------------
# Build the Workflow Graph
# -------------------------------------

workflow = StateGraph(DecisionState)

workflow.add_node("normalize_payload", normalize_inputs)
workflow.add_node("resolve_fields", resolve_fields)
workflow.add_node("evaluate_rules", evaluate_rules)

workflow.add_edge("normalize_payload", "resolve_fields")
workflow.add_conditional_edges(
    "resolve_fields",
    route_after_resolve,
    {"ask": END, "evaluate": "evaluate_rules"},
)
workflow.add_edge("evaluate_rules", END)

workflow.set_entry_point("normalize_payload")
decision_app = workflow.compile()


@dataclass(frozen=True)
class DecisionOutcome:
    """Exactly one of ``data_needed`` and ``decision`` is set."""

    data_needed: Optional[DataNeeded] = None
    decision: Optional[DecisionResult] = None

    def to_response(self) -> Dict[str, Any]:
        if self.data_needed is not None:
            return {"needsField": self.data_needed.model_dump(mode="json", by_alias=True)}
        return {"decision": self.decision.model_dump(mode="json")}


def decide(
    intent: Intent,
    question: str,
    payload: Mapping[str, Any],
    snapshot: FinancialSnapshot,
    profile: Optional[ProfileFlags] = None,
) -> DecisionOutcome:
    """Run one conversational turn: the next question, or the final decision."""
    result = decision_app.invoke({
        "intent": Intent(intent),
        "question": question,
        "payload": dict(payload or {}),
        "snapshot": snapshot,
        "profile": profile or ProfileFlags(),
    })
    data_needed = result.get("data_needed")
    if data_needed is not None:
        return DecisionOutcome(data_needed=data_needed)
    return DecisionOutcome(decision=result["decision"])


# -------------------------------------
# Interactive demo
# -------------------------------------

def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ask KudiGuard a business decision question and answer its follow-ups."
    )
    parser.add_argument("question", nargs="?", help="For example 'Can I hire another staff member?'")
    parser.add_argument("--revenue", type=float, required=True, help="Monthly revenue (₦).")
    parser.add_argument("--expenses", type=float, required=True, help="Monthly expenses (₦).")
    parser.add_argument("--savings", type=float, default=0, help="Current savings (₦).")
    parser.add_argument("--fmcg", action="store_true", help="You sell fast-moving consumer goods.")
    parser.add_argument(
        "--intent",
        choices=[intent.value for intent in Intent],
        default=None,
        help="Skip keyword detection and use this intent.",
    )
    return parser.parse_args()


def main() -> None:
    from kudiguard.service import DecisionService
    from kudiguard.store import InMemoryDecisionStore

    args = parse_args()
    question = args.question or input("What decision do you need help with? ").strip()

    user_id = "cli-user"
    store = InMemoryDecisionStore()
    store.add_snapshot(user_id, FinancialSnapshot(
        monthly_revenue=args.revenue,
        monthly_expenses=args.expenses,
        current_savings=args.savings,
    ))
    store.set_profile(user_id, ProfileFlags(is_fmcg_vendor=args.fmcg))
    service = DecisionService(store)

    payload: Dict[str, Any] = {}
    last_field = None
    while True:
        response = service.handle(user_id, {"intent": args.intent, "question": question, "payload": payload})
        if not response["success"]:
            error = response["error"]
            print(f"\n{error['code']}: {error['details']}")
            if error["code"] != "INVALID_INPUT" or last_field is None:
                return
            # ask the rejected field again
            payload.pop(last_field, None)
            last_field = None
            continue

        needed = response["data"].get("needsField")
        if needed is None:
            break
        hint = f" ({'/'.join(needed['options'])})" if needed.get("options") else ""
        answer = input(f"\n{needed['prompt']}{hint} ").strip()
        last_field = needed["field"]
        payload = {**needed["payloadSoFar"], last_field: answer}

    decision = response["data"]["decision"]
    print("\n=== KUDIGUARD RECOMMENDATION ===\n")
    print(f"{decision['recommendation']}: {decision['summary']}\n")
    for reason in decision["reasons"]:
        print(f"- {reason}")
    print("\nNext steps:")
    for step in decision["actionable_steps"]:
        print(f"- {step}")


if __name__ == "__main__":
    main()
