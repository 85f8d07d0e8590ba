from typing import List, Sequence, Tuple

import numpy as np

from sgpa.errors import InvalidMarks, NoCredits
from sgpa.logger import get_logger
from sgpa.models import AggregationResult, Mark, Subject, SubjectResult
from sgpa.validation import check_credit, check_weights, display_name, is_finite, to_number

log = get_logger("aggregator")


# ------------------------
# Per-subject evaluation
# ------------------------
def combine_marks(subject_name: str, marks: Sequence[Mark]) -> Tuple[float, float]:
    """
    Sum obtained and total across marks, validating each entry.
    Several CA entries are treated as one combined mark this way.
    """
    obtained_sum = 0.0
    total_sum = 0.0
    for mark in marks:
        o = to_number(mark.obtained)
        t = to_number(mark.total)
        if not is_finite(o, t) or t < 0 or o < 0 or o > t:
            raise InvalidMarks(subject_name)
        obtained_sum += o
        total_sum += t
    return obtained_sum, total_sum


def subject_percentage(subject: Subject) -> float:
    """Weighted sum of component percentages, on a 0-100 scale."""
    weights = check_weights(subject.name, subject.weights)

    components = [
        (weights["attendance"], [subject.attendance]),
        (weights["ca"], list(subject.ca)),
        (weights["midterm"], [subject.midterm]),
        (weights["endterm"], [subject.endterm]),
    ]

    final_percentage = 0.0
    for weight, marks in components:
        if weight <= 0:
            continue
        obtained, total = combine_marks(subject.name, marks)
        # weight > 0 with nothing entered contributes nothing
        if total > 0:
            final_percentage += (obtained / total) * weight
    return final_percentage


# ------------------------
# Entry point
# ------------------------
def compute_sgpa(subjects: Sequence[Subject]) -> AggregationResult:
    """
    subjects: subjects with every mark known
    returns: AggregationResult with the credit-weighted SGPA (0-10 scale)

    Raises the first SgpaValidationError met; nothing is accumulated past it.
    """
    grade_points: List[float] = []
    credits: List[float] = []
    subject_results: List[SubjectResult] = []

    for subject in subjects:
        try:
            credit = check_credit(subject.name, subject.credit)
            final_percentage = subject_percentage(subject)
        except ValueError as e:
            log.warning("SGPA calculation rejected: %s", e)
            raise

        grade_point = final_percentage / 10
        log.debug(
            "subject=%r credit=%s percentage=%.4f grade_point=%.4f",
            subject.name, credit, final_percentage, grade_point,
        )

        grade_points.append(grade_point)
        credits.append(credit)
        subject_results.append(
            SubjectResult(
                name=display_name(subject.name, len(subject_results) + 1),
                credit=credit,
                final_percentage=final_percentage,
                grade_point=grade_point,
            )
        )

    total_credits = float(sum(credits))
    if total_credits == 0:
        log.warning("SGPA calculation rejected: no credits")
        raise NoCredits()

    sgpa = float(np.dot(grade_points, credits) / total_credits)
    log.info("SGPA %.4f over %d subjects (%s credits)", sgpa, len(subject_results), total_credits)

    return AggregationResult(
        sgpa=sgpa,
        total_credits=total_credits,
        subject_results=tuple(subject_results),
    )
