import uuid
from typing import Dict, List, Tuple

import pandas as pd

from sgpa.models import (
    COMPONENTS,
    ComponentWeights,
    Mark,
    PredictMark,
    PredictSubject,
    Subject,
)
from sgpa.validation import to_number

# ------------------------
# CSV helpers (UI-side)
# ------------------------
# One row per mark. A subject's rows share its credit and weights.

WEIGHT_COLUMNS = {name: f"{name}_weight" for name in COMPONENTS}
REQUIRED_COLUMNS = ["subject", "credit", *WEIGHT_COLUMNS.values(), "component", "obtained", "total"]

_TRUE = {"true", "yes", "y", "1", "1.0", "done", "completed"}
_FALSE = {"false", "no", "n", "0", "0.0", "pending", ""}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    # allow "credits" and "name"
    if "credits" in df.columns and "credit" not in df.columns:
        df = df.rename(columns={"credits": "credit"})
    if "name" in df.columns and "subject" not in df.columns:
        df = df.rename(columns={"name": "subject"})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_marks_csv(df: pd.DataFrame, with_completion: bool = False) -> pd.DataFrame:
    df = _normalise_cols(df).dropna(how="all")
    required = REQUIRED_COLUMNS + ["completed"] if with_completion else list(REQUIRED_COLUMNS)
    missing = set(required) - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}.")

    out = df[required].copy()
    out["subject"] = out["subject"].fillna("").astype(str).str.strip()
    out["component"] = out["component"].fillna("").astype(str).str.strip().str.lower()

    unknown = sorted(set(out["component"]) - set(COMPONENTS))
    if unknown:
        raise ValueError(f"Unknown components: {unknown}. Expected one of {list(COMPONENTS)}.")

    if with_completion:
        out["completed"] = out["completed"].map(_parse_completed).astype(bool)
    return out


def _cell(row: pd.Series, column: str):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return value


def _parse_completed(value) -> bool:
    if isinstance(value, bool):
        return value
    text = "" if value is None or pd.isna(value) else str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Cannot read completed flag {value!r}. Use yes or no.")


def _group_rows(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """
    Rows of each subject, in the order subjects first appear.
    Every row needs a subject name, and a subject's rows must agree on
    credit and weights.
    """
    if (df["subject"] == "").any():
        raise ValueError("Every row needs a subject name.")

    groups = {}
    for name, group in df.groupby("subject", sort=False):
        for column in ["credit", *WEIGHT_COLUMNS.values()]:
            if group[column].map(to_number).nunique(dropna=False) > 1:
                raise ValueError(f"Rows for subject {name!r} disagree on {column}.")
        groups[name] = group
    return groups


def _weights(first: pd.Series) -> ComponentWeights:
    return ComponentWeights(**{name: _cell(first, col) for name, col in WEIGHT_COLUMNS.items()})


def _collect_marks(name: str, group: pd.DataFrame, make_mark) -> Tuple[dict, tuple]:
    # several ca rows are kept in order; any other component appears once
    marks = {}
    ca = []
    for _, row in group.iterrows():
        component = row["component"]
        mark = make_mark(row)
        if component == "ca":
            ca.append(mark)
        elif component in marks:
            raise ValueError(f"Duplicate {component} rows for subject {name!r}.")
        else:
            marks[component] = mark
    return marks, tuple(ca)


def _mark(row: pd.Series) -> Mark:
    return Mark(obtained=_cell(row, "obtained"), total=_cell(row, "total"))


def _predict_mark(row: pd.Series) -> PredictMark:
    completed = _parse_completed(row["completed"])
    return PredictMark(
        total=_cell(row, "total"),
        obtained=_cell(row, "obtained") if completed else None,
        is_completed=completed,
    )


def parse_subjects(df: pd.DataFrame) -> List[Subject]:
    df = validate_marks_csv(df)
    subjects = []
    for name, group in _group_rows(df).items():
        marks, ca = _collect_marks(name, group, _mark)
        subjects.append(
            Subject(
                id=str(uuid.uuid4()),
                name=name,
                credit=_cell(group.iloc[0], "credit"),
                weights=_weights(group.iloc[0]),
                ca=ca,
                **marks,
            )
        )
    return subjects


def parse_predict_subjects(df: pd.DataFrame) -> List[PredictSubject]:
    """
    Same layout as parse_subjects plus a completed column.
    Obtained is ignored on rows that are not completed.
    """
    df = validate_marks_csv(df, with_completion=True)
    subjects = []
    for name, group in _group_rows(df).items():
        marks, ca = _collect_marks(name, group, _predict_mark)
        subjects.append(
            PredictSubject(
                id=str(uuid.uuid4()),
                name=name,
                credit=_cell(group.iloc[0], "credit"),
                weights=_weights(group.iloc[0]),
                ca=ca,
                **marks,
            )
        )
    return subjects
