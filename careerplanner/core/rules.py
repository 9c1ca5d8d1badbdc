from typing import Protocol, List
from careerplanner.core.models import StudentScores, RuleResult


class RequirementRule(Protocol):
    def evaluate(self, scores: StudentScores) -> RuleResult: ...


class CoreRequirementRule:
    def __init__(self, subject: str, min_points: int):
        self.subject = subject
        self.min_points = int(min_points)

    def evaluate(self, scores: StudentScores) -> RuleResult:
        got = scores.points(self.subject)
        if got < self.min_points:
            return RuleResult(False, f"{self.subject}: need {self.min_points}, got {got}")
        return RuleResult(True, f"{self.subject} OK ({got} >= {self.min_points})")


class ElectiveRequirementRule:
    """At least one of the student's two electives must be on the accepted list."""

    def __init__(self, accepted: List[str]):
        self.accepted = list(accepted)

    def evaluate(self, scores: StudentScores) -> RuleResult:
        for subject in scores.elective_subjects:
            if subject in self.accepted:
                return RuleResult(True, f"Elective OK ({subject})")
        return RuleResult(False, f"Need one of: {', '.join(self.accepted)}")
