from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

from .errors import StorageError
from .ordering import application_count
from .records import CandidateRecord, JobRecord
from .schema import HEADERS


def ensure_dataset(path: Path, dataset: str) -> bool:
    """Create a dataset file holding only its header if it does not exist. Returns True if created."""
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(HEADERS[dataset] + "\n")
    except OSError as e:
        raise StorageError(f"Unable to create new file: {path}") from e
    return True


def append_record(path: Path, record: Union[JobRecord, CandidateRecord]) -> None:
    """Append one serialised record to the end of a dataset file."""
    try:
        with path.open("a", encoding="utf-8") as f:
            f.write(record.to_line() + "\n")
    except OSError as e:
        raise StorageError(f"Unable to write to file: {path}") from e


def parse_selection(text: str, available: int) -> List[int]:
    """
    Turn a comma separated list of 1-based job numbers into 0-based indexes.

    Repeated numbers collapse to one, keeping first-seen order. Blank input
    selects nothing.

    Raises:
        ValueError: If any number is not an integer in 1..available
    """
    indexes: List[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        index = int(part) - 1
        if not 0 <= index < available:
            raise ValueError(f"No job numbered {part}")
        if index not in indexes:
            indexes.append(index)
    return indexes


def apply_to_jobs(
    candidate: CandidateRecord,
    jobs: Sequence[JobRecord],
    indexes: Iterable[int],
) -> Dict[str, int]:
    """
    Submit a candidate's application to the selected jobs.

    Each selected job receives the candidate's serialised fields once.
    """
    applied = 0
    for index in dict.fromkeys(indexes):
        jobs[index].receive(candidate)
        applied += 1
    return {"applied": applied, "total_applications": application_count(jobs)}
