from typing import List, Protocol, Any
from careerplanner.core.models import Program
from careerplanner.core.rule_factory import RuleFactory

class ProgramRepository(Protocol):
    def list_programs(self) -> List[Program]:
        ...

class JsonProgramRepository:
    """Flattens the bundled universities.json into programs, keeping catalog order."""

    def __init__(self, universities_json: Any, factory: RuleFactory):
        self.universities_json = universities_json
        self.factory = factory

    def list_programs(self) -> List[Program]:
        programs: List[Program] = []
        for uni in self.universities_json:
            for p in uni.get("programs", []):
                programs.append(Program(
                    university=uni["university"],
                    abbreviation=uni.get("abbreviation", ""),
                    name=p["name"],
                    code=p.get("code", ""),
                    min_score=float(p.get("min_score", 0)),
                    core_requirements=dict(p.get("core_requirements") or {}),
                    weighted_subjects=dict(p.get("weighted_subjects") or {}),
                    elective_requirements=list(p.get("elective_requirements") or []),
                    rules=self.factory.from_json(p),
                ))
        return programs
