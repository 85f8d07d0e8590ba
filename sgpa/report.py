from decimal import Decimal, ROUND_HALF_UP

import pandas as pd

from sgpa.models import AggregationResult, PredictionResult


def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def breakdown_frame(result: AggregationResult) -> pd.DataFrame:
    """Subject breakdown table for display: Subject, Credit, Final %, Grade Point."""
    rows = [
        {
            "Subject": r.name,
            "Credit": r.credit,
            "Final %": round_2dp_half_up(r.final_percentage),
            "Grade Point": round_2dp_half_up(r.grade_point),
        }
        for r in result.subject_results
    ]
    return pd.DataFrame(rows, columns=["Subject", "Credit", "Final %", "Grade Point"])


def required_marks_frame(result: PredictionResult) -> pd.DataFrame:
    # empty unless the prediction succeeded
    rows = [
        {
            "Subject": m.subject_name,
            "Component": m.component_name,
            "Marks Needed": round_2dp_half_up(m.marks_needed),
            "Total Marks": m.total_marks,
        }
        for m in result.required_marks
    ]
    return pd.DataFrame(rows, columns=["Subject", "Component", "Marks Needed", "Total Marks"])
