"""
Typed job and candidate records and their dataset decoders.

Each attribute is decoded in dataset column order under one of two
policies. A mandatory attribute that fails voids the whole record
(MandatoryFieldInvalid). An optional attribute that fails is replaced by
its default and reported as a diagnostic, and decoding carries on.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from .errors import MandatoryFieldInvalid, OptionalFieldInvalid
from .logger import get_logger
from .schema import (
    AGE_LOWER_LIMIT,
    AGE_UPPER_LIMIT,
    APPLICATION_DATASET,
    GRADE_MAXIMUM,
    GRADE_MINIMUM,
    JOB_DATASET,
    PLACEHOLDER,
    SALARY_MINIMUM,
    Degree,
    Gender,
    Subject,
    format_date,
    is_blank,
    parse_date,
    parse_int,
)
from .tokenizer import is_storable, join_fields

logger = get_logger()

T = TypeVar("T")

NO_GRADE = 0


class FieldReader:
    """
    Reads typed values out of one raw field array.

    Missing trailing fields read as blank. Optional failures are collected
    in `diagnostics`; with `strict=True` they are raised instead, and with
    `lenient=True` mandatory failures are defaulted instead of raised.
    """

    def __init__(
        self,
        fields: Sequence[str],
        line_no: int,
        dataset: str,
        diagnostics: Optional[List[str]] = None,
        strict: bool = False,
        lenient: bool = False,
    ):
        self.fields = list(fields)
        self.line_no = line_no
        self.dataset = dataset
        self.diagnostics = diagnostics if diagnostics is not None else []
        self.strict = strict
        self.lenient = lenient

    def raw(self, index: int) -> str:
        if index < len(self.fields):
            return self.fields[index]
        return ""

    # Mandatory attributes

    def mandatory(self, index: int, name: str, parse: Callable[[str], T], default: T) -> T:
        try:
            return parse(self.raw(index))
        except ValueError:
            if self.lenient:
                return default
            raise MandatoryFieldInvalid(self.line_no, self.dataset, name)

    def mandatory_text(self, index: int, name: str) -> str:
        value = self.mandatory(index, name, _non_blank, "")
        if self.strict and not is_storable(value):
            raise MandatoryFieldInvalid(self.line_no, self.dataset, name)
        return value

    def mandatory_int(self, index: int, name: str, lower: int, upper: int) -> int:
        """Integer strictly between `lower` and `upper`."""
        def parse(text: str) -> int:
            value = parse_int(text)
            if not lower < value < upper:
                raise ValueError(f"{name} out of range: {value}")
            return value
        return self.mandatory(index, name, parse, 0)

    # Optional attributes

    def optional(self, name: str, decode: Callable[[], T], default: T) -> T:
        try:
            return decode()
        except OptionalFieldInvalid as e:
            if self.strict:
                raise
            self.diagnostics.append(e.message)
            if not self.lenient:
                logger.record_warning(e.category)
            logger.debug("Optional field defaulted", dataset=self.dataset, line=self.line_no, field=name)
            return default

    def optional_text(self, index: int, name: str) -> str:
        """Free text. Strict readers reject text the dataset line format cannot hold."""
        value = self.raw(index).strip()
        if self.strict and not is_storable(value):
            raise OptionalFieldInvalid(self.line_no, self.dataset, name)
        return value

    def optional_int(
        self,
        index: int,
        name: str,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        default: int = 0,
    ) -> int:
        """Integer within [minimum, maximum]. Blank gives `default` silently."""
        def decode() -> int:
            text = self.raw(index).strip()
            if text == "":
                return default
            try:
                value = parse_int(text)
            except ValueError:
                raise OptionalFieldInvalid(
                    self.line_no, self.dataset, name, OptionalFieldInvalid.NUMBER_FORMAT
                )
            if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
                raise OptionalFieldInvalid(self.line_no, self.dataset, name)
            return value
        return self.optional(name, decode, default)

    def optional_choice(self, index: int, name: str, parse: Callable[[str], T], default: T) -> T:
        def decode() -> T:
            try:
                return parse(self.raw(index))
            except ValueError:
                raise OptionalFieldInvalid(self.line_no, self.dataset, name)
        return self.optional(name, decode, default)

    def optional_date(self, index: int, name: str) -> Optional[date]:
        """Blank and malformed dates both read as None; strict readers reject malformed ones."""
        text = self.raw(index)
        value = parse_date(text)
        if value is None and self.strict and not is_blank(text):
            raise OptionalFieldInvalid(self.line_no, self.dataset, name)
        return value


def _non_blank(text: str) -> str:
    if is_blank(text):
        raise ValueError("blank value")
    return text.strip()


def _display(value) -> str:
    if value is None or value == "" or value == 0:
        return PLACEHOLDER
    return str(value)


def _number_field(value: int) -> str:
    return str(value) if value else ""


def _as_text(value) -> str:
    return "" if value is None else str(value)


def now_timestamp() -> int:
    return int(time.time())


@dataclass
class JobRecord:
    """A job posting and the raw applications it has received."""

    created_at: int
    title: str
    description: str = ""
    degree: Degree = Degree.NONE
    salary: int = 0
    start_date: Optional[date] = None
    received_applications: List[List[str]] = field(default_factory=list, compare=False, repr=False)

    CREATED_AT_INDEX = 0
    TITLE_INDEX = 1
    DESCRIPTION_INDEX = 2
    DEGREE_INDEX = 3
    SALARY_INDEX = 4
    START_DATE_INDEX = 5

    @classmethod
    def decode(
        cls,
        fields: Sequence[str],
        line_no: int,
        diagnostics: Optional[List[str]] = None,
        strict: bool = False,
        lenient: bool = False,
    ) -> "JobRecord":
        """
        Build a JobRecord from one raw field array.

        Raises:
            MandatoryFieldInvalid: If the title is blank (unless lenient)
            OptionalFieldInvalid: Only when strict
        """
        reader = FieldReader(fields, line_no, JOB_DATASET, diagnostics, strict, lenient)
        title = reader.mandatory_text(cls.TITLE_INDEX, "title")
        return cls(
            created_at=reader.optional_int(cls.CREATED_AT_INDEX, "createdAt"),
            title=title,
            description=reader.optional_text(cls.DESCRIPTION_INDEX, "description"),
            degree=reader.optional_choice(cls.DEGREE_INDEX, "degree", Degree.parse, Degree.NONE),
            salary=reader.optional_int(cls.SALARY_INDEX, "salary", minimum=SALARY_MINIMUM),
            start_date=reader.optional_date(cls.START_DATE_INDEX, "startDate"),
        )

    @classmethod
    def create(
        cls,
        title: str,
        description: str = "",
        degree: str = "",
        salary: str = "",
        start_date: str = "",
    ) -> "JobRecord":
        """Create a new job from user input, stamped with the current time. Invalid input raises."""
        fields = [str(now_timestamp()), title, description, degree, salary, start_date]
        return cls.decode([_as_text(f) for f in fields], 0, strict=True)

    def receive(self, candidate: "CandidateRecord"):
        """Record an application against this job."""
        self.received_applications.append(candidate.to_fields())

    @property
    def application_count(self) -> int:
        return len(self.received_applications)

    @property
    def has_applications(self) -> bool:
        return bool(self.received_applications)

    def to_fields(self) -> List[str]:
        return [
            str(self.created_at),
            self.title,
            self.description,
            self.degree.value,
            _number_field(self.salary),
            format_date(self.start_date),
        ]

    def to_line(self) -> str:
        return join_fields(self.to_fields())

    @property
    def title_display(self) -> str:
        return _display(self.title)

    @property
    def description_display(self) -> str:
        return _display(self.description)

    @property
    def degree_display(self) -> str:
        return _display(self.degree.value)

    @property
    def salary_display(self) -> str:
        return _display(self.salary)

    @property
    def start_date_display(self) -> str:
        return _display(format_date(self.start_date))


@dataclass
class CandidateRecord:
    """One job application, as submitted by an applicant."""

    created_at: int
    last_name: str
    first_name: str
    age: int
    career_summary: str = ""
    gender: Gender = Gender.UNSET
    degree: Degree = Degree.NONE
    grades: Dict[Subject, int] = field(default_factory=lambda: {s: NO_GRADE for s in Subject})
    salary_expectation: int = 0
    availability: Optional[date] = None

    CREATED_AT_INDEX = 0
    LAST_NAME_INDEX = 1
    FIRST_NAME_INDEX = 2
    CAREER_SUMMARY_INDEX = 3
    AGE_INDEX = 4
    GENDER_INDEX = 5
    DEGREE_INDEX = 6
    GRADE_INDEXES = {
        Subject.JAVA: 7,
        Subject.ALGORITHMS: 8,
        Subject.IT: 9,
        Subject.DATABASES: 10,
    }
    SALARY_EXPECTATION_INDEX = 11
    AVAILABILITY_INDEX = 12

    @classmethod
    def decode(
        cls,
        fields: Sequence[str],
        line_no: int,
        diagnostics: Optional[List[str]] = None,
        strict: bool = False,
        lenient: bool = False,
    ) -> "CandidateRecord":
        """
        Build a CandidateRecord from one raw field array.

        Last name, first name and age are mandatory; age must lie strictly
        between 18 and 100.

        Raises:
            MandatoryFieldInvalid: On a failed mandatory field (unless lenient)
            OptionalFieldInvalid: Only when strict
        """
        reader = FieldReader(fields, line_no, APPLICATION_DATASET, diagnostics, strict, lenient)
        last_name = reader.mandatory_text(cls.LAST_NAME_INDEX, "lastname")
        first_name = reader.mandatory_text(cls.FIRST_NAME_INDEX, "firstname")
        age = reader.mandatory_int(cls.AGE_INDEX, "age", AGE_LOWER_LIMIT, AGE_UPPER_LIMIT)

        created_at = reader.optional_int(cls.CREATED_AT_INDEX, "createdAt")
        career_summary = reader.optional_text(cls.CAREER_SUMMARY_INDEX, "careerSummary")
        gender = reader.optional_choice(cls.GENDER_INDEX, "gender", Gender.parse, Gender.UNSET)
        degree = reader.optional_choice(cls.DEGREE_INDEX, "highestDegree", Degree.parse, Degree.NONE)
        grades = {}
        for subject, index in cls.GRADE_INDEXES.items():
            grades[subject] = reader.optional_int(
                index, subject.value, minimum=GRADE_MINIMUM, maximum=GRADE_MAXIMUM, default=NO_GRADE
            )

        return cls(
            created_at=created_at,
            last_name=last_name,
            first_name=first_name,
            age=age,
            career_summary=career_summary,
            gender=gender,
            degree=degree,
            grades=grades,
            salary_expectation=reader.optional_int(
                cls.SALARY_EXPECTATION_INDEX, "salaryExpectations", minimum=SALARY_MINIMUM
            ),
            availability=reader.optional_date(cls.AVAILABILITY_INDEX, "availability"),
        )

    @classmethod
    def create(
        cls,
        last_name: str,
        first_name: str,
        age: str,
        career_summary: str = "",
        gender: str = "",
        degree: str = "",
        grades: Optional[Dict[Subject, str]] = None,
        salary_expectation: str = "",
        availability: str = "",
    ) -> "CandidateRecord":
        """Create a new application from user input, stamped with the current time. Invalid input raises."""
        grades = grades or {}
        fields = [
            str(now_timestamp()),
            last_name,
            first_name,
            career_summary,
            age,
            gender,
            degree,
            *(grades.get(subject, "") for subject in cls.GRADE_INDEXES),
            salary_expectation,
            availability,
        ]
        return cls.decode([_as_text(f) for f in fields], 0, strict=True)

    def set_grade(self, subject: Subject, grade: int):
        """Set the grade of a single subject. 0 clears it."""
        if grade != NO_GRADE and not GRADE_MINIMUM <= grade <= GRADE_MAXIMUM:
            raise OptionalFieldInvalid(0, APPLICATION_DATASET, subject.value)
        self.grades[subject] = grade

    @property
    def subject_count(self) -> int:
        """Number of subjects with a grade provided."""
        return sum(1 for grade in self.grades.values() if grade != NO_GRADE)

    @property
    def wam(self) -> float:
        """Mean of the provided grades, 0 when none were provided."""
        provided = [grade for grade in self.grades.values() if grade != NO_GRADE]
        if not provided:
            return 0
        return sum(provided) / len(provided)

    @property
    def has_career_summary(self) -> bool:
        return not is_blank(self.career_summary)

    @property
    def identity(self) -> tuple:
        return (self.first_name, self.last_name, self.age, self.created_at)

    def to_fields(self) -> List[str]:
        return [
            str(self.created_at),
            self.last_name,
            self.first_name,
            self.career_summary,
            str(self.age),
            self.gender.value,
            self.degree.value,
            *(_number_field(self.grades[subject]) for subject in self.GRADE_INDEXES),
            _number_field(self.salary_expectation),
            format_date(self.availability),
        ]

    def to_line(self) -> str:
        return join_fields(self.to_fields())

    @property
    def last_name_display(self) -> str:
        return _display(self.last_name)

    @property
    def first_name_display(self) -> str:
        return _display(self.first_name)

    @property
    def career_summary_display(self) -> str:
        return _display(self.career_summary)

    @property
    def gender_display(self) -> str:
        return _display(self.gender.value)

    @property
    def degree_display(self) -> str:
        return _display(self.degree.value)

    @property
    def salary_expectation_display(self) -> str:
        return _display(self.salary_expectation)

    @property
    def availability_display(self) -> str:
        return _display(format_date(self.availability))
