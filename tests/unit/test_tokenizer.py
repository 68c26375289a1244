import pytest

from app.services.parsers.tokenizer import split_into_rows, parse_line
from app.services.parsers.serializer import escape_field


@pytest.mark.parametrize("fields", [
    ["Понеділок", "09:00-10:30", "Математика"],
    ["a", "b", "", "d"],
    ["КН-21"],
])
def test_parse_line_returns_plain_fields(fields):
    assert parse_line(",".join(fields)) == fields


def test_parse_line_trims_whitespace_outside_quotes():
    assert parse_line("  Математика , Іванов ,101 ") == ["Математика", "Іванов", "101"]


@pytest.mark.parametrize("value", [
    "Математика, вища",
    'Курс "Основи програмування"',
    '"',
    ",,,",
])
def test_quoted_field_is_returned_verbatim(value):
    assert parse_line(escape_field(value) + ",next") == [value, "next"]


def test_quoted_content_keeps_inner_whitespace():
    assert parse_line('" padded ",x') == [" padded ", "x"]


def test_unterminated_quote_consumes_rest_of_line():
    assert parse_line('a,"b,c') == ["a", "b,c"]


def test_split_into_rows_handles_crlf_and_blank_lines():
    text = "a,b\r\nc,d\n\n   \ne,f\n"
    assert split_into_rows(text) == ["a,b", "c,d", "e,f"]


def test_newline_inside_quotes_does_not_split_row():
    rows = split_into_rows('"Лекція\nпрактика",Іванов\nx,y')
    assert rows == ['"Лекція\nпрактика",Іванов', "x,y"]
    assert parse_line(rows[0]) == ["Лекція\nпрактика", "Іванов"]


def test_empty_text_has_no_rows():
    assert split_into_rows("") == []
