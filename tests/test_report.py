"""
Tests for CLI text rendering.
"""

from datetime import date

from jobmatch.matching import MatchResult
from jobmatch.report import (
    NO_APPLICANTS,
    NO_JOBS,
    application_label,
    format_candidate,
    format_job,
    render_candidates,
    render_jobs,
    render_matches,
)
from jobmatch.schema import Degree


def test_application_labels():
    assert [application_label(i) for i in (0, 1, 25, 26, 27, 52)] == ["a", "b", "z", "a1", "b1", "a2"]


def test_format_job(make_job):
    job = make_job(
        title="Engineer",
        description="Backend, APIs",
        degree=Degree.BACHELOR,
        salary=90000,
        start_date=date(2022, 3, 1),
    )
    assert format_job(job, 1) == (
        "[1] Engineer (Backend, APIs). Bachelor. Salary: 90000. Start Date: 01/03/22."
    )


def test_format_job_placeholders(make_job):
    assert format_job(make_job(title="Intern"), 2) == (
        "[2] Intern (n/a). n/a. Salary: n/a. Start Date: n/a."
    )


def test_format_candidate(make_candidate):
    candidate = make_candidate(
        last_name="Lovelace",
        first_name="Ada",
        degree=Degree.PHD,
        career_summary="Mathematician",
        salary_expectation=150000,
        availability=date(2022, 2, 1),
    )
    assert format_candidate(candidate, "a") == (
        "[a] Lovelace, Ada (PHD): Mathematician. Salary Expectations: 150000. Available: 01/02/22"
    )


def test_render_jobs_nests_applications(make_job, make_candidate):
    job = make_job(title="Engineer")
    lines = render_jobs([job], [[make_candidate(last_name="A"), make_candidate(last_name="B")]])

    assert len(lines) == 3
    assert lines[1].startswith("    [a] A, Jane")
    assert lines[2].startswith("    [b] B, Jane")


def test_empty_collections():
    assert render_jobs([], []) == [NO_JOBS]
    assert render_candidates([]) == [NO_APPLICANTS]
    assert render_matches([], 0) == [NO_JOBS]
    assert render_matches([], 2) == [NO_APPLICANTS]


def test_render_matches(make_job, make_candidate):
    match = MatchResult(make_job(title="Engineer"), make_candidate(last_name="Turing", first_name="Alan"), 1.0)
    lines = render_matches([match], 1)

    assert lines[0].startswith("[1] Engineer")
    assert lines[1].startswith("    Applicant match: Turing, Alan")
