"""
Error taxonomy for dataset ingestion.

TokenizeError and MandatoryFieldInvalid make a whole line unusable and are
handled by the collection loader. OptionalFieldInvalid only ever affects a
single attribute and is handled inside the record decoder.
"""


class RecordError(Exception):
    """Base class for per-line dataset errors."""

    category = "data"

    def __init__(self, line_no: int, dataset: str, field: str = ""):
        self.line_no = line_no
        self.dataset = dataset
        self.field = field
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return f"WARNING: invalid {self.category} in {self.dataset} file in line {self.line_no}"


class TokenizeError(RecordError):
    """Raised when a line splits into more fields than the dataset allows."""

    category = "data format"


class MandatoryFieldInvalid(RecordError):
    """Raised when a required attribute is blank, unparsable or out of range."""

    category = "mandatory data field"


class OptionalFieldInvalid(RecordError):
    """Raised when an optional attribute fails validation."""

    NUMBER_FORMAT = "number format"
    CHARACTERISTIC = "characteristic"

    def __init__(self, line_no: int, dataset: str, field: str = "", category: str = CHARACTERISTIC):
        self.category = category
        super().__init__(line_no, dataset, field)


class StorageError(Exception):
    """Raised when a dataset file or the snapshot store cannot be used."""
    pass
