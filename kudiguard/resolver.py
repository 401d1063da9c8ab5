"""Slot-filling: find the next field to ask for, or the complete set of inputs."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from kudiguard.fields import FieldContext, FieldSpec, fields_for
from kudiguard.state import DataNeeded, FinancialSnapshot, Intent, ProfileFlags, ResolvedInputs


@dataclass(frozen=True)
class NeedsField:
    data_needed: DataNeeded


@dataclass(frozen=True)
class Answered:
    inputs: ResolvedInputs


Resolution = Union[NeedsField, Answered]


def _data_needed(spec: FieldSpec, ctx: FieldContext) -> DataNeeded:
    return DataNeeded(
        field=spec.name,
        prompt=spec.prompt,
        type=spec.type,
        options=list(spec.options) if spec.options else None,
        can_be_zero_or_none=spec.can_be_zero_or_none,
        payload_so_far=dict(ctx.payload),
        intent=ctx.intent,
    )


def apply_defaults(ctx: FieldContext) -> ResolvedInputs:
    """
    Build the evaluator's inputs once every triggered field is answered.

    A known value is kept while its trigger holds. Every other field takes its
    declared default, which is ``None`` for fields without one.
    """
    values = {spec.name: ctx.value(spec.name) for spec in fields_for(ctx.intent)}
    return ResolvedInputs(intent=ctx.intent, values=values)


def resolve(
    intent: Intent,
    payload: Mapping[str, Any],
    snapshot: FinancialSnapshot,
    question: str = "",
    profile: Optional[ProfileFlags] = None,
) -> Resolution:
    """
    Return the first triggered, unanswered field of ``intent`` or the resolved inputs.

    The payload is read, never modified; ``DataNeeded.payload_so_far`` is a copy the
    caller resubmits with the new answer merged in.
    """
    ctx = FieldContext(
        intent=intent,
        payload=dict(payload),
        snapshot=snapshot,
        profile=profile or ProfileFlags(),
        question=question or "",
    )
    for spec in fields_for(intent):
        if spec.is_answered(ctx.payload.get(spec.name)):
            continue
        if spec.trigger(ctx):
            return NeedsField(_data_needed(spec, ctx))
    return Answered(apply_defaults(ctx))
