from typing import Dict, Optional

import numpy as np

from sgpa.config import CONFIG
from sgpa.errors import InvalidCredit, WeightMismatch
from sgpa.models import COMPONENTS, ComponentWeights, Numeric


def to_number(value: Numeric) -> float:
    """
    Parse a raw form value into a float.
    Blank, missing or unparseable values come back as NaN.
    """
    if value is None:
        return float("nan")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return float("nan")
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def is_finite(*values: float) -> bool:
    return bool(np.all(np.isfinite(values)))


def parse_weights(weights: ComponentWeights) -> Dict[str, float]:
    parsed = {}
    for name in COMPONENTS:
        w = to_number(getattr(weights, name))
        parsed[name] = w if is_finite(w) else 0.0
    return parsed


def check_credit(subject_name: str, credit: Numeric) -> float:
    value = to_number(credit)
    if not is_finite(value) or value <= 0:
        raise InvalidCredit(subject_name)
    return value


def check_weights(
    subject_name: str,
    weights: ComponentWeights,
    tolerance: Optional[float] = None,
) -> Dict[str, float]:
    if tolerance is None:
        tolerance = CONFIG.WEIGHT_TOLERANCE

    parsed = parse_weights(weights)
    if abs(sum(parsed.values()) - 100.0) > tolerance:
        raise WeightMismatch(subject_name)
    return parsed


def display_name(name: str, position: int) -> str:
    # position is 1-based
    return name.strip() if name and name.strip() else f"Subject {position}"
