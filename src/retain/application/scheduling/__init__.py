# Application Scheduling Package
from .engine import grade_response
from .interval_model import DIFFICULTY_MULTIPLIERS, compute_interval
from .leitner import apply_override
from .strategies import (
    ComposedStrategy,
    LeitnerStrategy,
    Policy,
    SchedulingStrategy,
    Sm2Strategy,
    build_strategy,
)

__all__ = [
    "ComposedStrategy",
    "DIFFICULTY_MULTIPLIERS",
    "LeitnerStrategy",
    "Policy",
    "SchedulingStrategy",
    "Sm2Strategy",
    "apply_override",
    "build_strategy",
    "compute_interval",
    "grade_response",
]
