import pytest

from app.services.parsers.common_structs import ScheduleMetadata, FORMAT_ONLINE, FORMAT_OFFLINE
from app.services.parsers.metadata_extractor import (
    extract_metadata, extract_week_number, extract_lesson_format, extract_semester
)


@pytest.mark.parametrize("text, expected", [
    ("1 тиждень", 1),
    ("2 тиждень", 2),
    ("тиждень 2", 2),
    ("ІІ тиждень", 2),
    ("I тиждень", 1),
    ("перший тиждень", 1),
    ("Вторая неделя", 2),
    ("2-й тиж.", 2),
    ("Математика", None),
    ("", None),
])
def test_extract_week_number(text, expected):
    assert extract_week_number(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("Навчання онлайн", FORMAT_ONLINE),
    ("Дистанційна форма", FORMAT_ONLINE),
    ("Очна форма навчання", FORMAT_OFFLINE),
    ("OFFLINE", FORMAT_OFFLINE),
    ("Математика", None),
])
def test_extract_lesson_format(text, expected):
    assert extract_lesson_format(text) == expected


def test_extract_semester():
    assert extract_semester("Розклад, 1 семестр 2025-2026 н.р.") == "1 семестр 2025-2026 н.р."
    assert extract_semester("семестр без року") is None


def test_semester_only_row():
    metadata = extract_metadata(['2 семестр 2024-2025 н.р.'])
    assert metadata.semester == '2 семестр 2024-2025 н.р.'
    assert metadata.current_week is None
    assert metadata.default_format is None


def test_week_token_in_fixed_cells():
    metadata = extract_metadata(["Розклад занять", ",,,II,,"])
    assert metadata.current_week == 2


def test_first_week_marker_wins():
    assert extract_metadata(["1 тиждень", "2 тиждень"]).current_week == 1


def test_week_is_only_searched_in_first_five_rows():
    rows = ["x", "x", "x", "x", "x", "2 тиждень"]
    assert extract_metadata(rows).current_week is None


def test_lesson_week_marker_does_not_set_sheet_week():
    rows = [
        "Час,КН-21,,",
        ",Предмет,Викладач,Аудиторія",
        "Понеділок",
        "09:00-10:30,Фізика (2 тиждень),Петров,202",
    ]
    assert extract_metadata(rows).current_week is None


def test_week_phrase_in_second_group_cell_is_ignored():
    rows = [
        "Час,КН-21,,,КН-22,,",
        ",Предмет,Викладач,Аудиторія,Предмет,Викладач,Аудиторія",
        "Понеділок",
        "09:00-10:30,Математика,Іванов,101,Фізика 1 тиждень,Петров,202",
    ]
    assert extract_metadata(rows).current_week is None


def test_title_line_before_header_sets_week():
    rows = ["1 тиждень онлайн", "Час,КН-21,,", ",Предмет,Викладач,Аудиторія"]
    assert extract_metadata(rows).current_week == 1


def test_classroom_label_does_not_imply_offline():
    rows = ["Розклад", "Час,КН-21,,", ",Предмет,Викладач,Аудиторія", "Понеділок"]
    assert extract_metadata(rows).default_format is None


def test_format_is_searched_in_first_ten_rows():
    rows = ["x"] * 9 + ["онлайн", "офлайн"]
    assert extract_metadata(rows).default_format == FORMAT_ONLINE
    assert extract_metadata(["x"] * 10 + ["онлайн"]).default_format is None


def test_accepts_parsed_fields():
    metadata = extract_metadata([["1 тиждень", "онлайн"]])
    assert metadata == ScheduleMetadata(current_week=1, default_format=FORMAT_ONLINE)


def test_nothing_found():
    assert extract_metadata([]) == ScheduleMetadata()
