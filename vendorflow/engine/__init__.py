# Engine package - pure daily planning, no I/O
from vendorflow.engine.planner import build_daily_plan
from vendorflow.engine.plan_config import PlanConfig
from vendorflow.engine.sequences import (
    SequenceStep, SEQUENCE_TIERS, SEQUENCE_LABELS,
    determine_sequence_type, get_sequence_steps,
)
from vendorflow.engine.safety import get_insta_safety_limit
from vendorflow.engine.scoring import score_priority
from vendorflow.engine.allocator import stable_vendor_hash
