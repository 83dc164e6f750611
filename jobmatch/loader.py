"""
Collection loader for the job and application datasets.

Every data line is tokenized and decoded on its own. A line that cannot be
used is skipped with one diagnostic and loading moves on to the next line;
the loader itself never raises on bad data.
"""

from pathlib import Path
from typing import Iterable, List, NamedTuple, Union

from .errors import MandatoryFieldInvalid, RecordError, StorageError, TokenizeError
from .logger import get_logger
from .records import CandidateRecord, JobRecord
from .schema import (
    APPLICATION_DATASET,
    APPLICATION_FIELD_COUNT,
    JOB_DATASET,
    JOB_FIELD_COUNT,
)
from .tokenizer import split_line

logger = get_logger()

RECORD_TYPES = {
    JOB_DATASET: (JobRecord, JOB_FIELD_COUNT),
    APPLICATION_DATASET: (CandidateRecord, APPLICATION_FIELD_COUNT),
}


class LoadResult(NamedTuple):
    records: List[Union[JobRecord, CandidateRecord]]
    diagnostics: List[str]


def load_records(lines: Iterable[str], dataset: str) -> LoadResult:
    """
    Decode data lines (header excluded) into records.

    Args:
        lines: Data lines in file order; line numbers start at 1
        dataset: JOB_DATASET or APPLICATION_DATASET

    Returns:
        LoadResult with the decoded records, in input order, and one
        diagnostic string per problem found
    """
    record_type, field_count = RECORD_TYPES[dataset]
    records = []
    diagnostics: List[str] = []

    for line_no, line in enumerate(lines, start=1):
        logger.record_line(dataset)
        try:
            fields = split_line(line, field_count, line_no, dataset)
            record = record_type.decode(fields, line_no, diagnostics)
        except (TokenizeError, MandatoryFieldInvalid) as e:
            _skip(diagnostics, e.message, dataset, line_no, e.category)
            continue
        except Exception as e:
            message = RecordError(line_no, dataset).message
            logger.error("Unexpected decode failure", dataset=dataset, line=line_no, error=str(e))
            _skip(diagnostics, message, dataset, line_no, type(e).__name__)
            continue
        records.append(record)
        logger.record_loaded(dataset)

    for message in diagnostics:
        logger.warning(message)
    logger.debug(
        "Dataset loaded",
        dataset=dataset,
        records=len(records),
        diagnostics=len(diagnostics),
    )
    return LoadResult(records, diagnostics)


def _skip(diagnostics: List[str], message: str, dataset: str, line_no: int, category: str):
    diagnostics.append(message)
    logger.record_skipped(dataset, category)
    logger.debug("Skipping line", dataset=dataset, line=line_no, reason=category)


def read_lines(path: Path) -> List[str]:
    """
    Read the data lines of a dataset file, header excluded.

    A missing or empty file has no data lines.
    """
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise StorageError(f"Unable to read file: {path}") from e
    return lines[1:]


def read_dataset(path: Path, dataset: str) -> LoadResult:
    return load_records(read_lines(path), dataset)


def load_jobs(path: Path) -> LoadResult:
    return read_dataset(path, JOB_DATASET)


def load_candidates(path: Path) -> LoadResult:
    return read_dataset(path, APPLICATION_DATASET)
