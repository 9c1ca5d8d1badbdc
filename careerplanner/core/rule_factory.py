from typing import Dict, Any, List

from careerplanner.core.models import CORE_SUBJECTS
from careerplanner.core.rules import CoreRequirementRule, ElectiveRequirementRule


class RuleFactory:
    """
    Build the requirement rules of one program from its catalog entry.
    The repository calls: factory.from_json(program_cfg)
    """

    def from_json(self, program_cfg: Dict[str, Any]) -> List[Any]:
        rules: List[Any] = []

        # 1) core subject minimums, in core subject order; a 0 minimum never fails so it is skipped
        core_reqs = program_cfg.get("core_requirements") or {}
        for subject in CORE_SUBJECTS:
            min_points = core_reqs.get(subject)
            if min_points:
                rules.append(CoreRequirementRule(subject=subject, min_points=int(min_points)))

        # 2) accepted electives; empty list = any electives
        accepted = program_cfg.get("elective_requirements") or []
        if accepted:
            rules.append(ElectiveRequirementRule(accepted=accepted))

        return rules
