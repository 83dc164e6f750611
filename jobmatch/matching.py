"""
Matchmaking between jobs and the candidates who applied to them.

Responsibilities:
- Compute a deterministic score for a candidate against a job.
- Select one best candidate per job that received applications.

Invariant:
Given identical inputs, the engine always returns the same pairings.
Source records are never modified.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence

from .logger import get_logger
from .ordering import jobs_with_applications
from .records import CandidateRecord, JobRecord

logger = get_logger()

DEGREE_NORMALIZER = 3.0

# Language names looked for in a career summary (case-sensitive substrings)
KEYWORDS = ("python", "r", "javascript", "php", "go", "swift", "ruby", "css", "java")
SUMMARY_BASE_POINTS = 0.1
KEYWORD_POINTS = 0.1

# Penalty factor by number of subject grades supplied
COMPLETENESS_FACTORS = {0: 0.0, 1: 0.25, 2: 0.50, 3: 0.75, 4: 1.0}


class ScoreBreakdown(NamedTuple):
    degree: float
    academic: float
    summary: float

    @property
    def total(self) -> float:
        return self.degree + self.academic + self.summary


class MatchResult(NamedTuple):
    job: JobRecord
    candidate: CandidateRecord
    score: float


def degree_score(job: JobRecord, candidate: CandidateRecord) -> float:
    """Candidate's degree priority over 3, or 0 if below the job's minimum."""
    if candidate.degree.priority < job.degree.priority:
        return 0
    return candidate.degree.priority / DEGREE_NORMALIZER


def wam_weight(wam: float) -> float:
    if wam > 80:
        return 3.0
    if wam > 70:
        return 2.0
    if wam > 50:
        return 1.0
    return 0


def completeness_factor(subject_count: int) -> float:
    return COMPLETENESS_FACTORS.get(subject_count, 0)


def academic_score(candidate: CandidateRecord) -> float:
    return wam_weight(candidate.wam) * completeness_factor(candidate.subject_count)


def summary_score(candidate: CandidateRecord) -> float:
    if not candidate.has_career_summary:
        return 0
    points = SUMMARY_BASE_POINTS
    for keyword in KEYWORDS:
        if keyword in candidate.career_summary:
            points += KEYWORD_POINTS
    return points


def score_candidate(job: JobRecord, candidate: CandidateRecord) -> ScoreBreakdown:
    return ScoreBreakdown(
        degree=degree_score(job, candidate),
        academic=academic_score(candidate),
        summary=summary_score(candidate),
    )


def candidate_pool(job: JobRecord) -> List[CandidateRecord]:
    """
    Decode the applications a job received.

    These lines were validated when first submitted, so a field that fails
    now is defaulted rather than excluding the candidate.
    """
    return [CandidateRecord.decode(fields, 0, lenient=True) for fields in job.received_applications]


def find_match(job: JobRecord, candidates: Sequence[CandidateRecord]) -> Optional[MatchResult]:
    """
    Pick the best candidate for a job.

    A higher score wins; on an exact tie the earlier submission wins.
    Returns None for an empty pool.
    """
    top: Optional[CandidateRecord] = None
    top_score = 0.0
    for candidate in candidates:
        score = score_candidate(job, candidate).total
        if top is None or score > top_score or (
            score == top_score and candidate.created_at < top.created_at
        ):
            top = candidate
            top_score = score
    if top is None:
        return None
    return MatchResult(job, top, top_score)


def match_jobs(jobs: Iterable[JobRecord]) -> List[MatchResult]:
    """
    Match every job that received applications with its best candidate.

    Returns:
        One MatchResult per job with applications, in job order
    """
    matches = []
    for job in jobs_with_applications(jobs):
        result = find_match(job, candidate_pool(job))
        if result is None:
            continue
        matches.append(result)
        logger.record_match()
        logger.debug(
            "Matched job",
            title=job.title,
            candidate=f"{result.candidate.last_name}, {result.candidate.first_name}",
            score=round(result.score, 3),
        )
    return matches
