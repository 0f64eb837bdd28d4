# ABOUTME: Unit tests for import text parsing and validation.
# ABOUTME: Verifies line numbering, silent drops in parse_batch, and validate_batch messages.

from bookstock.core.batch import parse_batch, parse_line, sample_format, validate_batch


class TestParseLine:
    """Tests for single-line parsing."""

    def test_valid_line(self) -> None:
        """A three-field line yields a fully parsed query."""
        line = parse_line("  Dune | 2 | $45.00 ", line_number=4)
        assert line is not None
        assert line.title == "Dune"
        assert line.quantity == 2
        assert line.price == 45.0
        assert line.line_number == 4
        assert line.raw_text == "Dune | 2 | $45.00"

    def test_wrong_field_count(self) -> None:
        """Two or four fields are rejected."""
        assert parse_line("Dune | 2") is None
        assert parse_line("Dune | 2 | 3 | 4") is None

    def test_empty_title(self) -> None:
        """A blank title is rejected."""
        assert parse_line(" | 2 | 3") is None

    def test_bad_numbers_fall_back(self) -> None:
        """Unparseable quantity and price fall back to 1 and 0."""
        line = parse_line("Emma | many | ask")
        assert line is not None
        assert line.quantity == 1
        assert line.price == 0.0


class TestParseBatch:
    """Tests for multi-line parsing."""

    def test_drops_blank_and_malformed_lines(self) -> None:
        """Only valid lines survive, numbered by their position in the text."""
        books = parse_batch("Dune | 2 | $45.00\n\n|||invalid")
        assert len(books) == 1
        assert books[0].title == "Dune"
        assert books[0].quantity == 2
        assert books[0].price == 45.0
        assert books[0].line_number == 1

    def test_blank_lines_count_toward_numbering(self) -> None:
        books = parse_batch("\nDune | 1 | 5\n\nEmma | 1 | 6")
        assert [b.line_number for b in books] == [2, 4]

    def test_handles_crlf(self) -> None:
        """Windows line endings are trimmed with the rest of the whitespace."""
        books = parse_batch("Dune | 1 | 5\r\nEmma | 1 | 6\r\n")
        assert [b.title for b in books] == ["Dune", "Emma"]

    def test_empty_text(self) -> None:
        assert parse_batch("") == []
        assert parse_batch("\n \n") == []


class TestValidateBatch:
    """Tests for the validation pass."""

    def test_valid_batch(self) -> None:
        result = validate_batch("Dune | 2 | $45.00\nEmma | 1 | 10")
        assert result.valid
        assert result.errors == []

    def test_empty_input(self) -> None:
        """Whitespace-only input is reported as empty."""
        result = validate_batch("   \n")
        assert not result.valid
        assert result.errors == ["Import data is empty."]

    def test_reports_invalid_lines_but_stays_valid(self) -> None:
        """Bad lines are reported while a good line keeps the batch valid."""
        result = validate_batch("Dune | 2 | $45.00\n\n|||invalid")
        assert result.valid
        assert result.invalid_line_numbers == [3]
        assert result.errors == [
            'Line 3: Invalid format. Expected "Title | Quantity | Price"'
        ]

    def test_missing_title(self) -> None:
        result = validate_batch(" | 1 | 5")
        assert not result.valid
        assert "Line 1: Missing title" in result.errors

    def test_no_valid_lines(self) -> None:
        """A batch with only bad lines gets an overall message too."""
        result = validate_batch("just a title\nanother one")
        assert not result.valid
        assert result.invalid_line_numbers == [1, 2]
        assert any(msg.startswith("No valid book entries found.") for msg in result.messages)

    def test_agrees_with_parse_batch(self) -> None:
        """Every line parse_batch drops is one validate_batch reports."""
        text = "Dune | 1 | 5\n | 2 | 3\nbad\nEmma | 1 | 2"
        parsed = {b.line_number for b in parse_batch(text)}
        result = validate_batch(text)
        assert parsed == {1, 4}
        assert set(result.invalid_line_numbers) == {2, 3}


class TestSampleFormat:
    """Tests for the sample import text."""

    def test_sample_is_valid(self) -> None:
        """The sample parses cleanly, one book per line."""
        sample = sample_format()
        assert validate_batch(sample).valid
        assert len(parse_batch(sample)) == len(sample.splitlines())
