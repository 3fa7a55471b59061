"""
Sequence catalog - the fixed drip sequences a vendor can be assigned.

Each tier is an ordered list of steps. A step is sent `day` days after the
sequence starts, on one channel, and is either the first message on that
channel ("initial"), a nudge on a channel already contacted ("followup"), or
the terminal "end" marker on the pseudo-channel "exhausted".
"""
import json
import logging
from typing import List, Union, Iterable

from pydantic import BaseModel

from vendorflow.engine.channels import INSTAGRAM, WHATSAPP, EMAIL, EXHAUSTED

logger = logging.getLogger(__name__)


class StepType:
    INITIAL = "initial"
    FOLLOWUP = "followup"
    END = "end"


class SequenceStep(BaseModel):
    day: int
    channel: str  # instagram, whatsapp, email, exhausted
    type: str  # initial, followup, end

    @property
    def is_terminal(self) -> bool:
        return self.channel == EXHAUSTED or self.type == StepType.END


def _steps(*rows) -> List[SequenceStep]:
    return [SequenceStep(day=day, channel=channel, type=kind) for day, channel, kind in rows]


TIER_A = _steps(
    (0, INSTAGRAM, StepType.INITIAL),
    (3, WHATSAPP, StepType.INITIAL),
    (5, EMAIL, StepType.INITIAL),
    (8, INSTAGRAM, StepType.FOLLOWUP),
    (11, WHATSAPP, StepType.FOLLOWUP),
    (14, EMAIL, StepType.FOLLOWUP),
    (17, EXHAUSTED, StepType.END),
)

TIER_B = _steps(
    (0, WHATSAPP, StepType.INITIAL),
    (3, EMAIL, StepType.INITIAL),
    (7, WHATSAPP, StepType.FOLLOWUP),
    (11, EMAIL, StepType.FOLLOWUP),
    (14, EXHAUSTED, StepType.END),
)

TIER_C = _steps(
    (0, INSTAGRAM, StepType.INITIAL),
    (5, INSTAGRAM, StepType.FOLLOWUP),
    (12, EXHAUSTED, StepType.END),
)

TIER_D = _steps(
    (0, WHATSAPP, StepType.INITIAL),
    (4, WHATSAPP, StepType.FOLLOWUP),
    (10, EXHAUSTED, StepType.END),
)

TIER_E = _steps(
    (0, EMAIL, StepType.INITIAL),
    (5, EMAIL, StepType.FOLLOWUP),
    (12, EXHAUSTED, StepType.END),
)

SEQUENCE_TIERS = {
    "tier_a": TIER_A,
    "tier_b": TIER_B,
    "tier_c": TIER_C,
    "tier_d": TIER_D,
    "tier_e": TIER_E,
}

SEQUENCE_LABELS = {
    "tier_a": "Tier A (IG+WA+Email)",
    "tier_b": "Tier B (WA+Email)",
    "tier_c": "Tier C (IG only)",
    "tier_d": "Tier D (WA only)",
    "tier_e": "Tier E (Email only)",
}

CUSTOM_LABEL = "Custom"


def determine_sequence_type(has_instagram: bool, has_phone: bool, has_email: bool) -> str:
    """
    Pick the tier for a vendor's channel combination.

    Two-channel combinations that include Instagram have no tier of their own
    and fall back to tier_a; vendors with no channel at all fall back to tier_c.
    """
    if has_instagram and has_phone and has_email:
        return "tier_a"
    if not has_instagram and has_phone and has_email:
        return "tier_b"
    if has_instagram and not has_phone and not has_email:
        return "tier_c"
    if not has_instagram and has_phone and not has_email:
        return "tier_d"
    if not has_instagram and not has_phone and has_email:
        return "tier_e"
    # TODO: confirm with product whether IG+WA and IG+Email vendors should get dedicated tiers
    if has_instagram and has_phone:
        return "tier_a"
    if has_instagram and has_email:
        return "tier_a"
    return "tier_c"


def get_sequence_steps(sequence_type: str) -> List[SequenceStep]:
    """Fresh copy of a tier's steps (unknown types get an empty list)."""
    return [step.model_copy() for step in SEQUENCE_TIERS.get(sequence_type, [])]


def sequence_label(sequence_type: str) -> str:
    return SEQUENCE_LABELS.get(sequence_type, CUSTOM_LABEL)


def active_steps(steps: Iterable[SequenceStep]) -> List[SequenceStep]:
    """All steps except the terminal marker."""
    return [step for step in steps if not step.is_terminal]


def parse_steps(raw: Union[str, list, None]) -> List[SequenceStep]:
    """
    Load persisted steps, stored either as a JSON string or a list of dicts.
    Raises ValueError when the payload cannot be read as steps.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Sequence steps are not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise ValueError("Sequence steps must be a list")

    steps = []
    for item in raw:
        if isinstance(item, SequenceStep):
            steps.append(item)
        elif isinstance(item, dict):
            steps.append(SequenceStep.model_validate(item))
        else:
            raise ValueError(f"Unreadable sequence step: {item!r}")
    return steps


def dump_steps(steps: Iterable[SequenceStep]) -> List[dict]:
    """Serialize steps for the JSONB column."""
    return [step.model_dump() for step in steps]
