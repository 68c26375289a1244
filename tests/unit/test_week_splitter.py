from app.services.parsers.common_structs import Variant, UNKNOWN_TEACHER, EMPTY_CLASSROOM
from app.services.parsers.week_splitter import build_variants, strip_week_markers


def test_slash_pair_gives_two_weeks():
    variants = build_variants("Математика / Фізика", "Іванов / Петров", "101 / 202")
    assert variants == [
        Variant("Математика", "Іванов", "101", 1),
        Variant("Фізика", "Петров", "202", 2),
    ]


def test_unsplit_fields_are_duplicated():
    variants = build_variants("1 тиждень Математика / 2 тиждень Фізика", "Іванов", "101")
    assert variants == [
        Variant("Математика", "Іванов", "101", 1),
        Variant("Фізика", "Іванов", "101", 2),
    ]


def test_empty_half_is_dropped():
    variants = build_variants("Математика / -", "Іванов / —", "101")
    assert variants == [Variant("Математика", "Іванов", "101", 1)]


def test_both_halves_empty_gives_no_lesson():
    assert build_variants(" / ", "", "") == []


def test_placeholders_for_blank_fields_in_half():
    variants = build_variants("Математика / Фізика", "", "")
    assert [v.teacher for v in variants] == [UNKNOWN_TEACHER, UNKNOWN_TEACHER]
    assert [v.classroom for v in variants] == [EMPTY_CLASSROOM, EMPTY_CLASSROOM]


def test_inline_marker_tags_single_variant():
    assert build_variants("Фізика (2 тиждень)", "Петров", "202") == [Variant("Фізика", "Петров", "202", 2)]


def test_plain_cell_has_no_week():
    assert build_variants("Математика", "Іванов", "") == [Variant("Математика", "Іванов", EMPTY_CLASSROOM, None)]


def test_several_slashes_are_not_a_split():
    variants = build_variants("Укр/Англ/Нім мова", "Іванов", "101")
    assert variants == [Variant("Укр/Англ/Нім мова", "Іванов", "101", None)]


def test_strip_week_markers():
    assert strip_week_markers("Фізика (1 тиждень)") == "Фізика"
    assert strip_week_markers("II тиж. Хімія") == "Хімія"
    assert strip_week_markers("Хімія") == "Хімія"
