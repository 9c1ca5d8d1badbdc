from careerplanner.core.repositories import JsonProgramRepository
from careerplanner.core.rule_factory import RuleFactory
from careerplanner.exams.dse.loaders import load_universities, load_subjects, load_policy

def test_repository_flattens_in_catalog_order():
    data = [
        {"university": "A Uni", "abbreviation": "A", "programs": [
            {"name": "A1", "code": "JSA1", "min_score": 20},
            {"name": "A2", "code": "JSA2", "min_score": 21, "elective_requirements": ["Physics"]},
        ]},
        {"university": "B Uni", "abbreviation": "B", "programs": [
            {"name": "B1", "code": "JSB1", "min_score": 22, "core_requirements": {"English": 4}},
        ]},
    ]
    programs = JsonProgramRepository(data, RuleFactory()).list_programs()
    assert [p.code for p in programs] == ["JSA1", "JSA2", "JSB1"]
    assert programs[0].university == "A Uni"
    assert programs[0].rules == []
    assert programs[0].elective_requirements == []
    assert len(programs[1].rules) == 1
    assert programs[2].core_requirements == {"English": 4}

def test_bundled_catalog_loads(data_dir):
    root = f"{data_dir}/dse"
    programs = JsonProgramRepository(load_universities(root), RuleFactory()).list_programs()
    assert len(programs) > 0
    subjects = load_subjects(root)
    assert subjects["core"] == ["English", "Chinese", "Mathematics", "Liberal Studies"]
    electives = set(subjects["electives"])
    for p in programs:
        assert set(p.elective_requirements) <= electives
    assert load_policy(root)["interchangeable_groups"][0]["key"] == "M1/M2"
