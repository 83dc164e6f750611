"""
Tests for the collection loader.
"""

import pytest

from jobmatch import loader
from jobmatch.loader import load_candidates, load_jobs, load_records, read_lines
from jobmatch.records import CandidateRecord, JobRecord
from jobmatch.schema import APPLICATION_DATASET, JOB_DATASET


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Start every test with empty load metrics."""
    loader.logger.reset_metrics()
    yield


class TestLoadRecords:
    """Test line-by-line decoding with partial failure."""

    def test_out_of_range_age_drops_only_that_line(self):
        """A 5-line dataset with a bad age on line 3 yields 4 records and one diagnostic."""
        lines = [
            "1,Adams,Amy,,25,,,,,,,,",
            "2,Baker,Ben,,30,,,,,,,,",
            "3,Clark,Cat,,17,,,,,,,,",
            "4,Dunn,Dan,,45,,,,,,,,",
            "5,Evans,Eve,,60,,,,,,,,",
        ]
        result = load_records(lines, APPLICATION_DATASET)

        assert [c.last_name for c in result.records] == ["Adams", "Baker", "Dunn", "Evans"]
        assert result.diagnostics == [
            "WARNING: invalid mandatory data field in applications file in line 3"
        ]

    def test_records_keep_input_order(self, job_lines):
        """Records come back in file order."""
        result = load_records(job_lines, JOB_DATASET)

        assert [j.title for j in result.records] == ["Software Engineer", "Data Scientist", "Intern"]
        assert all(isinstance(j, JobRecord) for j in result.records)
        assert result.diagnostics == []

    def test_too_many_fields_skips_line(self):
        """A line that tokenizes into too many fields is dropped."""
        lines = ["1,Dev,,,,,extra", "2,Ops"]
        result = load_records(lines, JOB_DATASET)

        assert [j.title for j in result.records] == ["Ops"]
        assert result.diagnostics == ["WARNING: invalid data format in jobs file in line 1"]

    def test_optional_failure_keeps_record(self):
        """An optional failure is reported but the record is kept."""
        lines = ["1,Dev,,Diploma,100,", "2,Ops,,,,"]
        result = load_records(lines, JOB_DATASET)

        assert len(result.records) == 2
        assert result.diagnostics == ["WARNING: invalid characteristic in jobs file in line 1"]

    def test_garbage_never_raises(self):
        """Unexpected input turns into skipped lines, not exceptions."""
        lines = [None, "", "1,Dev"]
        result = load_records(lines, JOB_DATASET)

        assert [j.title for j in result.records] == ["Dev"]
        assert len(result.diagnostics) == 2

    def test_fully_malformed_dataset_is_empty(self):
        """The worst case is an empty collection plus one diagnostic per line."""
        lines = [",,,,", "x,,y"]
        result = load_records(lines, APPLICATION_DATASET)

        assert result.records == []
        assert len(result.diagnostics) == 2

    def test_metrics_recorded(self):
        """Lines read, loaded and skipped are tracked."""
        load_records(["1,Dev", ",,"], JOB_DATASET)
        metrics = loader.logger.get_metrics()

        assert metrics["lines_read"] == 2
        assert metrics["records_loaded"] == 1
        assert metrics["lines_skipped"] == 1
        assert metrics["datasets"][JOB_DATASET]["load_rate"] == 0.5


class TestReadDataset:
    """Test reading dataset files."""

    def test_header_skipped(self, jobs_csv):
        """The first line is the header and is not data."""
        lines = read_lines(jobs_csv)
        assert len(lines) == 3
        assert not lines[0].startswith("createdAt")

    def test_load_jobs(self, jobs_csv):
        result = load_jobs(jobs_csv)
        assert len(result.records) == 3
        assert result.records[0].description == "Backend services, APIs"

    def test_load_candidates(self, applications_csv):
        result = load_candidates(applications_csv)

        assert len(result.records) == 3
        assert all(isinstance(c, CandidateRecord) for c in result.records)
        assert result.records[0].career_summary == "Wrote python, java and go"

    def test_missing_file_is_empty(self, tmp_path):
        """A dataset that does not exist has no records."""
        result = load_jobs(tmp_path / "absent.csv")
        assert result.records == []
        assert result.diagnostics == []
