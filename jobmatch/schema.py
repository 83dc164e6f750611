import re
from datetime import date
from enum import Enum
from typing import Optional

JOB_DATASET = "jobs"
APPLICATION_DATASET = "applications"

JOB_FIELDS = ["createdAt", "title", "description", "degree", "salary", "startDate"]
APPLICATION_FIELDS = [
    "createdAt",
    "lastname",
    "firstname",
    "careerSummary",
    "age",
    "gender",
    "highestDegree",
    "COMP90041",
    "COMP90038",
    "COMP90007",
    "INFO90002",
    "salaryExpectations",
    "availability",
]

JOB_FIELD_COUNT = len(JOB_FIELDS)
APPLICATION_FIELD_COUNT = len(APPLICATION_FIELDS)

HEADERS = {
    JOB_DATASET: ",".join(JOB_FIELDS),
    APPLICATION_DATASET: ",".join(APPLICATION_FIELDS),
}

# Exclusive bounds
AGE_LOWER_LIMIT = 18
AGE_UPPER_LIMIT = 100
# Inclusive bounds
GRADE_MINIMUM = 49
GRADE_MAXIMUM = 100
SALARY_MINIMUM = 1

DATE_FORMAT = "%d/%m/%y"
_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{2})$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
PLACEHOLDER = "n/a"


class Degree(Enum):
    NONE = ""
    BACHELOR = "Bachelor"
    MASTER = "Master"
    PHD = "PHD"

    @property
    def priority(self) -> int:
        return _DEGREE_PRIORITY[self]

    @classmethod
    def parse(cls, text: Optional[str]) -> "Degree":
        """Map a dataset literal to a Degree. Blank is NONE; anything else unknown raises ValueError."""
        value = (text or "").strip()
        return cls(_DEGREE_ALIASES.get(value, value))


_DEGREE_PRIORITY = {Degree.NONE: 0, Degree.BACHELOR: 1, Degree.MASTER: 2, Degree.PHD: 3}
_DEGREE_ALIASES = {"PhD": "PHD"}


class Gender(Enum):
    UNSET = ""
    FEMALE = "female"
    MALE = "male"
    OTHER = "other"

    @classmethod
    def parse(cls, text: Optional[str]) -> "Gender":
        return cls((text or "").strip())


class Subject(Enum):
    """The four graded subjects, in dataset column order."""

    JAVA = "COMP90041"
    ALGORITHMS = "COMP90038"
    IT = "COMP90007"
    DATABASES = "INFO90002"


def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a dd/MM/yy date. Blank and malformed input both give None.

    Two-digit years always fall in 2000-2099.
    """
    if is_blank(text):
        return None
    match = _DATE_RE.match(text.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(2000 + year, month, day)
    except ValueError:
        return None


def format_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def parse_int(text: str) -> int:
    """Parse a plain decimal integer, optionally signed. Anything else raises ValueError."""
    value = text.strip()
    if not _INT_RE.match(value):
        raise ValueError(f"not a decimal integer: {text!r}")
    return int(value)
