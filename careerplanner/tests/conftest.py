import os

import pytest

from careerplanner.config import Settings, DEFAULT_DATA_DIR
from careerplanner.core.repositories import JsonProgramRepository
from careerplanner.core.rule_factory import RuleFactory
from careerplanner.exams.dse.policy import DsePolicy

SUBJECTS = {
    "grades": ["5**", "5*", "5", "4", "3", "2", "1", "U"],
    "core": ["English", "Chinese", "Mathematics", "Liberal Studies"],
    "electives": ["Physics", "Chemistry", "Biology", "Economics", "BAFS", "Geography",
                  "History", "Chinese History", "ICT", "M1", "M2"],
}
POLICY = {"default_weight": 1, "interchangeable_groups": [{"key": "M1/M2", "subjects": ["M1", "M2"]}]}


@pytest.fixture
def policy():
    return DsePolicy(POLICY, SUBJECTS)


@pytest.fixture
def student_raw():
    return {
        "English": "5",
        "Chinese": "5",
        "Mathematics": "5*",
        "Liberal Studies": "4",
        "Physics": "5",
        "Chemistry": "4",
    }


@pytest.fixture
def scores(policy, student_raw):
    return policy.build_scores(student_raw, ["Physics", "Chemistry"])


def make_program(name="Prog", min_score=0, core=None, weights=None, electives=None):
    return {
        "name": name,
        "code": name.upper(),
        "min_score": min_score,
        "core_requirements": core or {},
        "weighted_subjects": weights or {},
        "elective_requirements": electives or [],
    }


def make_repo(*programs, university="Uni"):
    return JsonProgramRepository(
        [{"university": university, "abbreviation": "U", "programs": list(programs)}],
        RuleFactory(),
    )


@pytest.fixture
def settings():
    return Settings(data_dir=DEFAULT_DATA_DIR, poe_api_key=None)


@pytest.fixture
def data_dir():
    assert os.path.isdir(DEFAULT_DATA_DIR)
    return DEFAULT_DATA_DIR
