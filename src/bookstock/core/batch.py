# ABOUTME: Line and batch parsing for "Title | Quantity | Price" import text.
# ABOUTME: parse_batch silently drops bad lines; validate_batch reports them by line number.

from dataclasses import dataclass, field

from bookstock.core.prices import parse_price, parse_quantity

FIELD_SEPARATOR = "|"
EXPECTED_FIELDS = 3

_FORMAT_HINT = '"Title | Quantity | Price"'

_SAMPLE_FORMAT = (
    "1000 First Words in German | 1 | 16,000\n"
    "101 Video Games to Play Before You Grow Up | 1 | 8,000\n"
    "1, 2, 3, Do the Dinosaur | 2 | 4,500\n"
    "12th of Never | 1 | 3,000\n"
    "30 Book Samples to Change Your Life | 1 | 7,000"
)


@dataclass(frozen=True)
class BookQueryLine:
    """One parsed row of import text, ready to be searched."""

    title: str
    quantity: int
    price: float
    line_number: int
    raw_text: str


@dataclass(frozen=True)
class LineError:
    """A malformed line found by the validation pass."""

    line_number: int
    message: str


@dataclass
class BatchValidation:
    """Outcome of validate_batch: verdict, per-line errors, general messages."""

    valid: bool = True
    line_errors: list[LineError] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)

    @property
    def invalid_line_numbers(self) -> list[int]:
        return [error.line_number for error in self.line_errors]

    @property
    def errors(self) -> list[str]:
        """All error messages, line errors first."""
        return [error.message for error in self.line_errors] + self.messages


def _split_fields(line: str) -> list[str]:
    return [part.strip() for part in line.split(FIELD_SEPARATOR)]


def parse_line(line: str, line_number: int = 1) -> BookQueryLine | None:
    """Parse a single "Title | Quantity | Price" line.

    Returns None when the line does not have exactly three fields or the
    title is empty.
    """
    parts = _split_fields(line)
    if len(parts) != EXPECTED_FIELDS:
        return None

    title, quantity, price = parts
    if not title:
        return None

    return BookQueryLine(
        title=title,
        quantity=parse_quantity(quantity),
        price=parse_price(price),
        line_number=line_number,
        raw_text=line.strip(),
    )


def _numbered_lines(text: str) -> list[tuple[int, str]]:
    """Trimmed, non-blank lines paired with their 1-indexed position in text."""
    numbered = []
    for index, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if stripped:
            numbered.append((index, stripped))
    return numbered


def parse_batch(text: str) -> list[BookQueryLine]:
    """Parse multi-line import text, dropping blank and malformed lines."""
    if not text:
        return []

    books = []
    for line_number, line in _numbered_lines(text):
        parsed = parse_line(line, line_number)
        if parsed is not None:
            books.append(parsed)
    return books


def validate_batch(text: str) -> BatchValidation:
    """Check import text before submission and report every rejected line.

    The batch is valid only if the input is non-empty and at least one line
    would be accepted by parse_batch.
    """
    result = BatchValidation()

    if not text or not text.strip():
        result.valid = False
        result.messages.append("Import data is empty.")
        return result

    valid_lines = 0
    for line_number, line in _numbered_lines(text):
        parts = _split_fields(line)
        if len(parts) != EXPECTED_FIELDS:
            result.line_errors.append(
                LineError(
                    line_number,
                    f"Line {line_number}: Invalid format. Expected {_FORMAT_HINT}",
                )
            )
        elif not parts[0]:
            result.line_errors.append(
                LineError(line_number, f"Line {line_number}: Missing title")
            )
        else:
            valid_lines += 1

    if valid_lines == 0:
        result.valid = False
        result.messages.append(
            f"No valid book entries found. Please check the format: {_FORMAT_HINT}"
        )

    return result


def sample_format() -> str:
    """Example import text showing the expected line format."""
    return _SAMPLE_FORMAT
