import logging
from typing import List

from careerplanner.core.models import StudentScores, ProgramMatch
from careerplanner.core.repositories import ProgramRepository

logger = logging.getLogger(__name__)


class ProgramMatcher:
    def __init__(self, repo: ProgramRepository, policy):
        self.repo = repo
        self.policy = policy

    def evaluate_student(self, scores: StudentScores) -> List[ProgramMatch]:
        """Score every catalog program; qualified first, then by descending score."""
        results: List[ProgramMatch] = []

        for prog in self.repo.list_programs():
            score, notes = self.policy.compute_aggregate_with_breakdown(scores, prog)

            missing: List[str] = []
            for rule in prog.rules:
                rr = rule.evaluate(scores)
                if rr.passed is False:
                    missing.append(rr.explanation)

            results.append(ProgramMatch(
                program=prog,
                score=score,
                qualified=score >= prog.min_score and not missing,
                missing_requirements=missing,
                breakdown=notes,
            ))

        # sorted() is stable, so equal scores keep catalog order
        results = sorted(results, key=lambda m: (not m.qualified, -m.score))
        logger.debug("Scored %d programs, %d qualified",
                     len(results), sum(1 for m in results if m.qualified))
        return results
