"""Text rendering of jobs, applicants and matches for the CLI."""

import string
from typing import Iterable, List

from .matching import MatchResult
from .records import CandidateRecord, JobRecord

NO_JOBS = "No jobs available."
NO_APPLICANTS = "No applicants available."


def application_label(position: int) -> str:
    """Letter label for the n-th (0-based) application under a job: a..z, then a1..z1, ..."""
    letter = string.ascii_lowercase[position % 26]
    cycle = position // 26
    return letter if cycle == 0 else f"{letter}{cycle}"


def format_job(job: JobRecord, index: int) -> str:
    return (
        f"[{index}] {job.title_display} ({job.description_display}). {job.degree_display}. "
        f"Salary: {job.salary_display}. Start Date: {job.start_date_display}."
    )


def format_candidate(candidate: CandidateRecord, label) -> str:
    return (
        f"[{label}] {candidate.last_name_display}, {candidate.first_name_display} "
        f"({candidate.degree_display}): {candidate.career_summary_display}. "
        f"Salary Expectations: {candidate.salary_expectation_display}. "
        f"Available: {candidate.availability_display}"
    )


def format_match(match: MatchResult, index: int) -> List[str]:
    candidate = match.candidate
    return [
        format_job(match.job, index),
        (
            f"    Applicant match: {candidate.last_name_display}, {candidate.first_name_display} "
            f"({candidate.degree_display}): {candidate.career_summary_display}. "
            f"Salary Expectations: {candidate.salary_expectation_display}. "
            f"Available: {candidate.availability_display}"
        ),
    ]


def render_jobs(jobs: List[JobRecord], received: List[List[CandidateRecord]]) -> List[str]:
    """Job listing, each job followed by the applications it received."""
    if not jobs:
        return [NO_JOBS]
    lines = []
    for index, (job, candidates) in enumerate(zip(jobs, received), start=1):
        lines.append(format_job(job, index))
        for position, candidate in enumerate(candidates):
            lines.append("    " + format_candidate(candidate, application_label(position)))
    return lines


def render_candidates(candidates: Iterable[CandidateRecord]) -> List[str]:
    lines = [format_candidate(c, index) for index, c in enumerate(candidates, start=1)]
    return lines or [NO_APPLICANTS]


def render_matches(matches: List[MatchResult], job_count: int) -> List[str]:
    if not job_count:
        return [NO_JOBS]
    if not matches:
        return [NO_APPLICANTS]
    lines = []
    for index, match in enumerate(matches, start=1):
        lines.extend(format_match(match, index))
    return lines
