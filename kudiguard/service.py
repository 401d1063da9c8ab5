"""Request handling around the decision graph: validation, store access and envelopes."""

import uuid
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from kudiguard.errors import (
    InputValidationError,
    PersistenceError,
    UpstreamDataMissingError,
    handle_error,
    redact_sensitive_data,
    response_meta,
)
from kudiguard.intents import detect_intent
from kudiguard.logger import get_logger
from kudiguard.main import decide
from kudiguard.state import DecisionRequest, FinancialSnapshot, Intent, ProfileFlags
from kudiguard.store import DecisionStore

logger = get_logger("kudiguard.service")

# intents whose field triggers read the vendor profile
PROFILE_INTENTS = {Intent.INVENTORY}


def _validation_details(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "body"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


class DecisionService:
    def __init__(self, store: DecisionStore):
        self.store = store

    def handle(self, user_id: str, body: Mapping[str, Any]) -> Dict[str, Any]:
        """Process one conversational turn and return the response envelope."""
        request_id = str(uuid.uuid4())
        logger.info("[%s] Decision request from %s: %s", request_id, user_id, redact_sensitive_data(body))

        try:
            data = self._handle(request_id, user_id, body)
        except Exception as e:
            return handle_error(e, request_id, user_id, body)

        return {"success": True, "data": data, "error": None, "meta": response_meta(request_id)}

    def _handle(self, request_id: str, user_id: str, body: Mapping[str, Any]) -> Dict[str, Any]:
        request = self._parse(body)

        snapshot = self._fetch_snapshot(user_id)
        profile = self._fetch_profile(user_id) if request.intent in PROFILE_INTENTS else None

        outcome = decide(request.intent, request.question, request.payload, snapshot, profile)
        data = outcome.to_response()
        if outcome.decision is None:
            return data

        try:
            data["decisionId"] = self.store.save_decision(user_id, request.question, outcome.decision)
        except Exception as e:
            raise PersistenceError("Failed to save decision.", f"{type(e).__name__}: {e}") from e

        logger.info(
            "[%s] Saved %s decision %s: %s",
            request_id, request.intent.value, data["decisionId"], outcome.decision.recommendation.value,
        )
        return data

    def _parse(self, body: Mapping[str, Any]) -> DecisionRequest:
        if not isinstance(body, Mapping):
            raise InputValidationError("Invalid request body.", "Request body must be a JSON object.")
        try:
            request = DecisionRequest.model_validate(dict(body))
        except ValidationError as e:
            raise InputValidationError("Invalid request body.", _validation_details(e)) from e

        if request.intent is None:
            detected = detect_intent(request.question)
            if detected is None:
                raise InputValidationError(
                    "Could not determine the decision type.",
                    "Please specify an intent: " + ", ".join(intent.value for intent in Intent) + ".",
                    field="intent",
                )
            request = request.model_copy(update={"intent": detected})
        return request

    def _fetch_snapshot(self, user_id: str) -> FinancialSnapshot:
        try:
            snapshot = self.store.fetch_latest_snapshot(user_id)
        except Exception as e:
            raise PersistenceError("Failed to fetch financial data.", f"{type(e).__name__}: {e}") from e
        if snapshot is None:
            raise UpstreamDataMissingError(
                "No financial data found.",
                "Please add your monthly revenue, expenses and savings before asking for a decision.",
            )
        return snapshot

    def _fetch_profile(self, user_id: str) -> ProfileFlags:
        try:
            profile = self.store.fetch_profile(user_id)
        except Exception as e:
            raise PersistenceError("Failed to fetch profile.", f"{type(e).__name__}: {e}") from e
        if profile is None:
            raise UpstreamDataMissingError(
                "No business profile found.",
                "Please complete your business profile before asking about inventory.",
                code="PROFILE_NOT_FOUND",
            )
        return profile
