# app/services/core/view_filter.py

import re
from datetime import date, timedelta
from typing import List, Optional

from app.services.parsers.common_structs import (
    Lesson, ScheduleFilters, FilterOptions, ScheduleStatistics
)
from app.services.utils.data_validator import day_index, time_to_minutes

UK_ALPHABET = "абвгґдеєжзиіїйклмнопрстуфхцчшщьюя"


def generate_lesson_id(day_of_week: str, start_time: str, group: str, index: int) -> str:
    """Детерминированный id занятия: день, время начала, группа и порядковый номер."""
    base = f"{day_of_week}-{start_time}-{group}-{index}"
    return re.sub(r'\s+', '_', base).lower()


def _slot_key(lesson: Lesson) -> tuple:
    return lesson.day_of_week, lesson.start_time, lesson.group


def filter_lessons(lessons: List[Lesson], filters: Optional[ScheduleFilters] = None) -> List[Lesson]:
    """
    Фильтрует занятия; все условия объединяются через И.
    Входной список не изменяется, порядок сохраняется.

    Фильтр недели скрывает занятие другой недели, только если в том же слоте
    (день, время, группа) есть пара на выбранную неделю. Одиночное занятие
    "на одну неделю" остается видимым при любом фильтре.
    """
    if not lessons:
        return []
    if filters is None:
        return list(lessons)

    requested_week_slots = set()
    if filters.week_number:
        requested_week_slots = {_slot_key(l) for l in lessons if l.week_number == filters.week_number}

    search = (filters.search or '').strip().lower()

    result = []
    for lesson in lessons:
        if (filters.week_number and lesson.week_number and lesson.week_number != filters.week_number
                and _slot_key(lesson) in requested_week_slots):
            continue
        if filters.group and lesson.group != filters.group:
            continue
        if filters.teacher and lesson.teacher != filters.teacher:
            continue
        if filters.classroom and lesson.classroom != filters.classroom:
            continue
        if filters.subgroup and lesson.subgroup_number and lesson.subgroup_number != filters.subgroup:
            continue
        if search and not any(search in value.lower() for value in
                              (lesson.subject, lesson.teacher, lesson.group, lesson.classroom)):
            continue
        result.append(lesson)

    return result


def _uk_sort_key(value: str) -> tuple:
    # Порядок украинского алфавита (Ґ, Є, І, Ї на своих местах), без учета регистра
    ranks = []
    for char in value.casefold():
        position = UK_ALPHABET.find(char)
        if position >= 0:
            ranks.append((1, position))
        elif ord(char) < 0x400:
            ranks.append((0, ord(char)))
        else:
            ranks.append((2, ord(char)))
    return tuple(ranks), value


def _unique_sorted(values) -> List[str]:
    return sorted({v for v in values if v}, key=_uk_sort_key)


def extract_filter_options(lessons: List[Lesson]) -> FilterOptions:
    """Уникальные группы, преподаватели и аудитории для выпадающих списков."""
    lessons = lessons or []
    return FilterOptions(
        groups=_unique_sorted(l.group for l in lessons),
        teachers=_unique_sorted(l.teacher for l in lessons),
        classrooms=_unique_sorted(l.classroom for l in lessons),
    )


def calculate_statistics(lessons: List[Lesson]) -> ScheduleStatistics:
    lessons = lessons or []
    return ScheduleStatistics(
        total_lessons=len(lessons),
        active_groups=len({l.group for l in lessons if l.group}),
        teachers=len({l.teacher for l in lessons if l.teacher}),
        classrooms=len({l.classroom for l in lessons if l.classroom}),
    )


def sort_lessons_by_day_and_time(lessons: List[Lesson]) -> List[Lesson]:
    """Стабильная сортировка: сначала по дню недели, затем по времени начала."""
    if not lessons:
        return []
    return sorted(lessons, key=lambda l: (day_index(l.day_of_week), time_to_minutes(l.start_time)))


def calculate_academic_week(today: date) -> int:
    """
    Номер недели (1 или 2), считая от недели, в которую попадает 1 сентября
    текущего учебного года. Нечетные недели - первая, четные - вторая.
    """
    year = today.year if today.month >= 9 else today.year - 1
    september_first = date(year, 9, 1)
    week_start = september_first - timedelta(days=september_first.weekday())
    weeks_passed = (today - week_start).days // 7
    return 1 if weeks_passed % 2 == 0 else 2


def get_effective_week(manual_week: Optional[int], today: date) -> int:
    """Неделя, указанная вручную в таблице, важнее вычисленной."""
    if manual_week in (1, 2):
        return manual_week
    return calculate_academic_week(today)
