from typing import List, Sequence, Tuple

from sgpa.config import CONFIG
from sgpa.errors import InvalidMarks, InvalidTarget, InvalidTotal, NoCredits
from sgpa.logger import get_logger
from sgpa.models import (
    Numeric,
    PendingComponent,
    PredictionResult,
    PredictionStatus,
    PredictMark,
    PredictSubject,
    RequiredMark,
)
from sgpa.validation import check_credit, check_weights, display_name, is_finite, to_number

log = get_logger("predictor")

SGPA_MIN = 0.0
SGPA_MAX = 10.0


def check_target(target_sgpa: Numeric) -> float:
    target = to_number(target_sgpa)
    if not is_finite(target) or target < SGPA_MIN or target > SGPA_MAX:
        raise InvalidTarget()
    return target


def expand_components(subject: PredictSubject, weights: dict) -> List[Tuple[str, float, PredictMark]]:
    """
    (label, weight, mark) for every weighted item of a subject.
    Each CA entry is its own item carrying an equal share of the CA weight.
    """
    items = []
    for label, key in (("Attendance", "attendance"), ("Midterm", "midterm"), ("Endterm", "endterm")):
        if weights[key] > 0:
            items.append((label, weights[key], getattr(subject, key)))

    if weights["ca"] > 0 and subject.ca:
        unit_weight = weights["ca"] / len(subject.ca)
        for i, mark in enumerate(subject.ca):
            items.append((f"CA {i + 1}", unit_weight, mark))
    return items


def completed_contribution(subject_name: str, credit: float, weight: float, mark: PredictMark) -> float:
    o = to_number(mark.obtained)
    t = to_number(mark.total)
    if not is_finite(o, t) or t <= 0 or o < 0:
        raise InvalidMarks(subject_name, "Obtained and total must be numbers, with a positive total.")
    if o > t:
        if CONFIG.STRICT_PREDICTOR_MARKS:
            raise InvalidMarks(subject_name)
        log.warning("subject=%r completed mark %s/%s exceeds its total", subject_name, o, t)
    return credit * ((o / t) * weight / 10)


def predict_required_marks(subjects: Sequence[PredictSubject], target_sgpa: Numeric) -> PredictionResult:
    """
    Find the single percentage that, scored on every pending component,
    lifts the SGPA to target_sgpa.

    The same fraction of its own total is asked of each pending item;
    heavier items are not favoured.
    """
    try:
        target = check_target(target_sgpa)
    except ValueError as e:
        log.warning("Prediction rejected: %s", e)
        raise

    current_sum = 0.0
    total_credits = 0.0
    remaining_weight_credit_sum = 0.0
    pending: List[PendingComponent] = []

    for position, subject in enumerate(subjects, start=1):
        try:
            credit = check_credit(subject.name, subject.credit)
            weights = check_weights(subject.name, subject.weights)
            total_credits += credit

            for label, weight, mark in expand_components(subject, weights):
                if mark.is_completed:
                    current_sum += completed_contribution(subject.name, credit, weight, mark)
                    continue

                t = to_number(mark.total)
                if not is_finite(t) or t <= 0:
                    raise InvalidTotal(subject.name)
                remaining_weight_credit_sum += (weight / 10) * credit
                pending.append(
                    PendingComponent(
                        subject_name=display_name(subject.name, position),
                        component_name=label,
                        weight=weight,
                        credit=credit,
                        total_marks=t,
                    )
                )
        except ValueError as e:
            log.warning("Prediction rejected: %s", e)
            raise

    if total_credits == 0:
        log.warning("Prediction rejected: no credits")
        raise NoCredits()

    sum_needed = target * total_credits
    remaining_needed = sum_needed - current_sum
    log.debug(
        "target=%s current_sum=%.4f remaining_needed=%.4f pending=%d",
        target, current_sum, remaining_needed, len(pending),
    )

    if remaining_needed <= 0:
        log.info("Target SGPA %.2f already achieved", target)
        return PredictionResult(
            status=PredictionStatus.ACHIEVED,
            message=f"Congratulations! You have already achieved your desired SGPA of {target:.2f}.",
        )

    if not pending:
        log.info("Target SGPA %.2f not met and nothing is pending", target)
        return PredictionResult(
            status=PredictionStatus.IMPOSSIBLE,
            message="Desired SGPA is not met and there are no pending components to score in.",
        )

    required_fraction = remaining_needed / remaining_weight_credit_sum
    required_percentage = required_fraction * 100

    if required_fraction > 1.0:
        log.info("Target SGPA %.2f needs %.2f%%, out of reach", target, required_percentage)
        return PredictionResult(
            status=PredictionStatus.IMPOSSIBLE,
            message=(
                "It's impossible to achieve your desired SGPA. "
                f"You would need to score {required_percentage:.2f}% in all remaining components."
            ),
        )

    required_marks = tuple(
        RequiredMark(
            subject_name=comp.subject_name,
            component_name=comp.component_name,
            marks_needed=comp.total_marks * required_fraction,
            total_marks=comp.total_marks,
        )
        for comp in pending
    )
    log.info("Target SGPA %.2f needs %.2f%% on %d components", target, required_percentage, len(pending))

    return PredictionResult(
        status=PredictionStatus.SUCCESS,
        message=f"To achieve an SGPA of {target:.2f}, you need to score:",
        required_percentage=required_percentage,
        required_marks=required_marks,
    )
