from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

# Raw form value: a number, a numeric string, or nothing entered yet
Numeric = Union[float, int, str, None]

COMPONENTS = ("attendance", "ca", "midterm", "endterm")


@dataclass(frozen=True)
class ComponentWeights:
    """Percentage of the subject total carried by each component."""

    attendance: Numeric = 0
    ca: Numeric = 0
    midterm: Numeric = 0
    endterm: Numeric = 0


@dataclass(frozen=True)
class Mark:
    obtained: Numeric = None
    total: Numeric = None


@dataclass(frozen=True)
class PredictMark:
    total: Numeric = None
    obtained: Numeric = None
    is_completed: bool = False


@dataclass(frozen=True)
class Subject:
    """
    A subject whose marks are all known.

    ca holds one Mark per continuous assessment; its length is the CA count.
    """

    id: str
    name: str
    credit: Numeric
    weights: ComponentWeights
    attendance: Mark = Mark()
    ca: Tuple[Mark, ...] = ()
    midterm: Mark = Mark()
    endterm: Mark = Mark()


@dataclass(frozen=True)
class PredictSubject:
    id: str
    name: str
    credit: Numeric
    weights: ComponentWeights
    attendance: PredictMark = PredictMark()
    ca: Tuple[PredictMark, ...] = ()
    midterm: PredictMark = PredictMark()
    endterm: PredictMark = PredictMark()


@dataclass(frozen=True)
class SubjectResult:
    name: str
    credit: float
    final_percentage: float
    grade_point: float


@dataclass(frozen=True)
class AggregationResult:
    sgpa: float
    total_credits: float
    subject_results: Tuple[SubjectResult, ...]


@dataclass(frozen=True)
class PendingComponent:
    subject_name: str
    component_name: str
    weight: float
    credit: float
    total_marks: float


@dataclass(frozen=True)
class RequiredMark:
    subject_name: str
    component_name: str
    marks_needed: float
    total_marks: float


class PredictionStatus(str, Enum):
    ACHIEVED = "achieved"
    IMPOSSIBLE = "impossible"
    SUCCESS = "success"


@dataclass(frozen=True)
class PredictionResult:
    status: PredictionStatus
    message: str
    required_percentage: Optional[float] = None
    required_marks: Tuple[RequiredMark, ...] = field(default_factory=tuple)
