"""
Field tokenizer for the job and application datasets.

A field may be wrapped in one pair of double quotes so that it can contain
the delimiter. Quotes inside an already quoted field are not supported: they
act as field separators, so at most one quoted span per field tokenizes
reliably.

A quote at the very start of the line opens a span like any other field, so
`"a,b",c` splits into `a,b` and `c` with no leading empty field.
"""

from typing import List, Optional, Sequence

from .errors import TokenizeError

DELIMITER = ","
QUOTE = '"'


def split_line(
    line: str,
    expected: Optional[int] = None,
    line_no: int = 0,
    dataset: str = "",
    delimiter: str = DELIMITER,
) -> List[str]:
    """
    Split one dataset line into raw field strings.

    A quote at the start of a field opens a span; the span closes at the next
    quote followed by the delimiter (or at the end of the line). The quotes
    are stripped and delimiters inside the span are kept as text. Trailing
    empty fields are dropped.

    Args:
        line: One line of text
        expected: Maximum number of fields allowed (None = no check)
        line_no: 1-based line number, used for the error
        dataset: Dataset name, used for the error
        delimiter: Field separator

    Returns:
        List of raw field strings

    Raises:
        TokenizeError: If the line has more than `expected` fields
    """
    line = line.rstrip("\r\n")
    fields: List[str] = []
    pos = 0

    while True:
        if line.startswith(QUOTE, pos):
            end = line.find(QUOTE + delimiter, pos + 1)
            if end == -1:
                span = line[pos + 1:]
                if span.endswith(QUOTE):
                    span = span[:-1]
                fields.extend(span.split(QUOTE))
                break
            fields.extend(line[pos + 1:end].split(QUOTE))
            pos = end + len(QUOTE + delimiter)
        else:
            end = line.find(delimiter, pos)
            if end == -1:
                fields.append(line[pos:])
                break
            fields.append(line[pos:end])
            pos = end + len(delimiter)

    while fields and fields[-1] == "":
        fields.pop()

    if expected is not None and len(fields) > expected:
        raise TokenizeError(line_no, dataset)
    return fields


def quote_field(value: str, delimiter: str = DELIMITER) -> str:
    if delimiter in value:
        return f"{QUOTE}{value}{QUOTE}"
    return value


def join_fields(fields: Sequence[str], delimiter: str = DELIMITER) -> str:
    """Join fields into one line, quoting any field that contains the delimiter."""
    return delimiter.join(quote_field(f, delimiter) for f in fields)


def is_storable(value: str, delimiter: str = DELIMITER) -> bool:
    """
    True if `value` splits back unchanged after `join_fields`.

    A value that starts with a quote would open a quoted span on reading, and
    a quote inside a value that gets quoted would end or split its span.
    """
    if value.startswith(QUOTE):
        return False
    return not (QUOTE in value and delimiter in value)
