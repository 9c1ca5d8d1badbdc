from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

# Fixed DSE grade table, best grade first. "U" (unclassified) earns nothing.
GRADE_POINTS: Dict[str, int] = {
    "5**": 7,
    "5*": 6,
    "5": 5,
    "4": 4,
    "3": 3,
    "2": 2,
    "1": 1,
    "U": 0,
}

CORE_SUBJECTS = ("English", "Chinese", "Mathematics", "Liberal Studies")


class IncompleteScoresError(ValueError):
    """Raised when a core subject or an elective has no grade yet."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__("Missing required subject scores: " + ", ".join(self.missing))


class InvalidScoresError(ValueError):
    """Raised for unknown grades or an elective selection that is not allowed."""


def grade_points(grade: str) -> int:
    try:
        return GRADE_POINTS[grade]
    except KeyError:
        raise InvalidScoresError(f"Unknown DSE grade: {grade!r}") from None


@dataclass(frozen=True)
class StudentScores:
    core: Dict[str, str]
    electives: Dict[str, str]

    @property
    def elective_subjects(self) -> List[str]:
        return list(self.electives.keys())

    def points(self, subject: str) -> int:
        if subject in self.core:
            return grade_points(self.core[subject])
        return grade_points(self.electives[subject])

    def as_dict(self) -> Dict[str, str]:
        out = dict(self.core)
        out.update(self.electives)
        return out


@dataclass
class RuleResult:
    passed: bool
    explanation: str


@dataclass
class Program:
    university: str
    abbreviation: str
    name: str
    code: str
    min_score: float
    core_requirements: Dict[str, int] = field(default_factory=dict)
    weighted_subjects: Dict[str, float] = field(default_factory=dict)
    elective_requirements: List[str] = field(default_factory=list)
    rules: List[Any] = field(default_factory=list)  # RequirementRule at runtime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "university": self.university,
            "abbreviation": self.abbreviation,
            "name": self.name,
            "code": self.code,
            "min_score": self.min_score,
            "core_requirements": dict(self.core_requirements),
            "weighted_subjects": dict(self.weighted_subjects),
            "elective_requirements": list(self.elective_requirements),
        }


@dataclass
class ProgramMatch:
    program: Program
    score: float
    qualified: bool
    missing_requirements: List[str]
    breakdown: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        item = self.program.to_dict()
        item.update({
            "score": self.score,
            "qualified": self.qualified,
            "missing_requirements": list(self.missing_requirements),
            "breakdown": list(self.breakdown or []),
        })
        return item
