"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import date
from pathlib import Path
from typing import List

from jobmatch.records import CandidateRecord, JobRecord
from jobmatch.schema import APPLICATION_DATASET, HEADERS, JOB_DATASET, Degree, Gender, Subject


@pytest.fixture
def job_lines() -> List[str]:
    """Job data lines (header excluded)."""
    return [
        '1600000000,Software Engineer,"Backend services, APIs",Bachelor,90000,01/03/22',
        "1600000100,Data Scientist,Modelling,PHD,120000,15/04/22",
        "1600000200,Intern,,,,",
    ]


@pytest.fixture
def application_lines() -> List[str]:
    """Application data lines (header excluded)."""
    return [
        '1600001000,Lovelace,Ada,"Wrote python, java and go",36,female,PHD,95,90,85,80,150000,01/02/22',
        "1600001100,Turing,Alan,,41,male,Master,70,75,,,100000,",
        "1600001200,Hopper,Grace,COBOL,85,female,Bachelor,,,,,,10/01/22",
    ]


@pytest.fixture
def jobs_csv(tmp_path, job_lines) -> Path:
    """Jobs dataset file with a header."""
    path = tmp_path / "jobs.csv"
    path.write_text("\n".join([HEADERS[JOB_DATASET]] + job_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def applications_csv(tmp_path, application_lines) -> Path:
    """Applications dataset file with a header."""
    path = tmp_path / "applications.csv"
    path.write_text("\n".join([HEADERS[APPLICATION_DATASET]] + application_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_candidate():
    """Factory for CandidateRecord with sensible defaults."""
    def factory(**overrides) -> CandidateRecord:
        grades = overrides.pop("grades", {})
        values = {
            "created_at": 100,
            "last_name": "Doe",
            "first_name": "Jane",
            "age": 30,
            "career_summary": "",
            "gender": Gender.UNSET,
            "degree": Degree.NONE,
            "salary_expectation": 0,
            "availability": None,
        }
        values.update(overrides)
        candidate = CandidateRecord(**values)
        for subject, grade in grades.items():
            candidate.set_grade(subject, grade)
        return candidate
    return factory


@pytest.fixture
def make_job():
    """Factory for JobRecord with sensible defaults."""
    def factory(**overrides) -> JobRecord:
        values = {
            "created_at": 1,
            "title": "Engineer",
            "description": "",
            "degree": Degree.NONE,
            "salary": 0,
            "start_date": None,
        }
        values.update(overrides)
        return JobRecord(**values)
    return factory


@pytest.fixture
def all_grades():
    """Helper turning four grades into a subject mapping."""
    def build(java, algorithms, it, databases):
        return {
            Subject.JAVA: java,
            Subject.ALGORITHMS: algorithms,
            Subject.IT: it,
            Subject.DATABASES: databases,
        }
    return build


@pytest.fixture
def start_date() -> date:
    return date(2022, 3, 1)
