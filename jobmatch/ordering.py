"""
Ordering and filtering of candidate collections.

Every function returns a new list and leaves its input untouched. All sort
keys end in a deterministic tie-break.
"""

from datetime import date
from enum import Enum
from typing import Iterable, List, Sequence

from .records import CandidateRecord, JobRecord


class FilterType(Enum):
    LASTNAME = "lastname"
    DEGREE = "degree"
    WAM = "wam"
    AVAILABILITY = "availability"


def _name_key(candidate: CandidateRecord) -> tuple:
    return (candidate.last_name.lower(), candidate.first_name.lower())


def _date_key(value) -> tuple:
    # Absent dates sort after every concrete date
    return (value is None, value or date.min)


def sort_by_surname(candidates: Iterable[CandidateRecord]) -> List[CandidateRecord]:
    """Case-insensitive last name, then earliest submission first."""
    return sorted(candidates, key=lambda c: (c.last_name.lower(), c.created_at))


def sort_by_degree(candidates: Iterable[CandidateRecord]) -> List[CandidateRecord]:
    """Highest degree first (PHD, Master, Bachelor, none), then earliest submission first."""
    return sorted(candidates, key=lambda c: (-c.degree.priority, c.created_at))


def sort_by_wam(candidates: Iterable[CandidateRecord]) -> List[CandidateRecord]:
    """Highest WAM first, then by full name."""
    return sorted(candidates, key=lambda c: (-c.wam, _name_key(c)))


def sort_for_listing(candidates: Iterable[CandidateRecord]) -> List[CandidateRecord]:
    """Earliest availability first with undated applicants last, then by full name."""
    return sorted(candidates, key=lambda c: (_date_key(c.availability), _name_key(c)))


def sort_by_availability(candidates: Iterable[CandidateRecord]) -> List[CandidateRecord]:
    """Earliest availability first with undated applicants last, then earliest submission first."""
    return sorted(candidates, key=lambda c: (_date_key(c.availability), c.created_at))


_FILTERS = {
    FilterType.LASTNAME: sort_by_surname,
    FilterType.DEGREE: sort_by_degree,
    FilterType.WAM: sort_by_wam,
    FilterType.AVAILABILITY: sort_by_availability,
}


def filter_applications(candidates: Iterable[CandidateRecord], filter_type) -> List[CandidateRecord]:
    """
    Order candidates by the named filter.

    Args:
        candidates: Candidates to order
        filter_type: FilterType or its string value ("lastname", "degree", "wam", "availability")

    Raises:
        ValueError: If the filter type is unknown
    """
    return _FILTERS[FilterType(filter_type)](candidates)


def received_candidates(jobs: Iterable[JobRecord]) -> List[CandidateRecord]:
    """
    All candidates who applied to any job, once each, in first-seen order.

    Applications are identified by first name, last name, age and
    submission time.
    """
    seen = set()
    candidates = []
    for job in jobs:
        for fields in job.received_applications:
            candidate = CandidateRecord.decode(fields, 0, lenient=True)
            if candidate.identity in seen:
                continue
            seen.add(candidate.identity)
            candidates.append(candidate)
    return candidates


def application_count(jobs: Iterable[JobRecord]) -> int:
    """Total number of applications received across all jobs."""
    return sum(job.application_count for job in jobs)


def jobs_with_applications(jobs: Iterable[JobRecord]) -> List[JobRecord]:
    return [job for job in jobs if job.has_applications]


def available_jobs(jobs: Sequence[JobRecord], applied: Iterable[JobRecord]) -> List[JobRecord]:
    """Jobs not yet applied to, in input order."""
    applied_ids = {id(job) for job in applied}
    return [job for job in jobs if id(job) not in applied_ids]
