# careerplanner/exams/dse/policy.py
from typing import Dict, Any, Tuple, List, Optional, Mapping

from careerplanner.core.models import (
    CORE_SUBJECTS,
    GRADE_POINTS,
    IncompleteScoresError,
    InvalidScoresError,
    Program,
    StudentScores,
)


class DsePolicy:
    """
    HKDSE aggregate calculation:
    - The four core subjects are always counted, unweighted.
    - Exactly two electives from the catalog are counted, each multiplied by a weight:
        * the program's explicit weight for that subject, if it has one;
        * otherwise, if the subject belongs to an interchangeable group (e.g. M1/M2),
          the program's weight for the group key, default 1;
        * otherwise 1.
    - Grades map to points via GRADE_POINTS (5** = 7 ... U = 0).
    Interchangeable groups come from policy.json so the catalog can add more without code changes.
    """

    def __init__(self, policy_cfg: Dict[str, Any], subjects_catalog: Dict[str, Any]):
        self.cfg = policy_cfg
        self.subjects_catalog = subjects_catalog

        self.default_weight = float(policy_cfg.get("default_weight", 1))
        self.core_subjects = list(subjects_catalog.get("core", CORE_SUBJECTS))
        self.electives = list(subjects_catalog.get("electives", []))

        # subject -> group key, e.g. "M1" -> "M1/M2"
        self.group_of: Dict[str, str] = {}
        for group in policy_cfg.get("interchangeable_groups", []):
            for subject in group.get("subjects", []):
                self.group_of[subject] = group["key"]

    # ---------- input validation ----------
    def build_scores(self, raw_scores: Mapping[str, Optional[str]],
                     electives: Optional[List[str]] = None) -> StudentScores:
        """
        Turn form input into StudentScores. When electives are not given they are the
        non-core subjects of raw_scores, in input order.
        Raises IncompleteScoresError before anything else is checked.
        """
        if electives is None:
            electives = [s for s in raw_scores if s not in self.core_subjects]
        chosen = [e for e in electives if e]

        missing: List[str] = []
        for subject in self.core_subjects:
            if not raw_scores.get(subject):
                missing.append(subject)
        for subject in chosen:
            if not raw_scores.get(subject):
                missing.append(subject)
        for idx in range(len(chosen), 2):
            missing.append(f"Elective {idx + 1}")
        if missing:
            raise IncompleteScoresError(missing)

        if len(chosen) > 2:
            raise InvalidScoresError(f"Exactly two electives are allowed, got {len(chosen)}")
        if chosen[0] == chosen[1]:
            raise InvalidScoresError(f"Electives must be different subjects, got {chosen[0]} twice")
        for subject in chosen:
            if subject not in self.electives:
                raise InvalidScoresError(f"Unknown elective subject: {subject}")

        core = {s: raw_scores[s] for s in self.core_subjects}
        picked = {s: raw_scores[s] for s in chosen}
        for subject, grade in list(core.items()) + list(picked.items()):
            if grade not in GRADE_POINTS:
                raise InvalidScoresError(f"{subject}: unknown DSE grade {grade!r}")

        return StudentScores(core=core, electives=picked)

    # ---------- weights ----------
    def weight_for(self, program: Program, subject: str) -> float:
        weights = program.weighted_subjects
        if subject in weights:
            return float(weights[subject])
        group = self.group_of.get(subject)
        if group is not None:
            return float(weights.get(group, self.default_weight))
        return self.default_weight

    # ---------- main ----------
    def compute_aggregate_with_breakdown(self, scores: StudentScores,
                                         program: Program) -> Tuple[float, List[str]]:
        notes: List[str] = []
        total = 0.0

        for subject in self.core_subjects:
            pts = scores.points(subject)
            total += pts
            notes.append(f"CORE {subject}: {scores.core[subject]} -> {pts}")

        for subject in scores.elective_subjects:
            pts = scores.points(subject)
            w = self.weight_for(program, subject)
            total += pts * w
            notes.append(f"ELEC {subject}: {scores.electives[subject]} -> {pts} x {w:g}")

        return total, notes
