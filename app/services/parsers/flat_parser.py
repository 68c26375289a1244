# app/services/parsers/flat_parser.py

from typing import Dict, List, Optional

from .common_structs import Lesson, UNKNOWN_SUBJECT, UNKNOWN_TEACHER, EMPTY_CLASSROOM
from .tokenizer import parse_line

from app.services.core.view_filter import generate_lesson_id
from app.services.utils.data_validator import is_day_of_week, parse_time_str


def _field(fields: List[str], index: int) -> str:
    return fields[index].strip() if index < len(fields) else ''


def _strict_time(value: str) -> Optional[str]:
    parsed = parse_time_str(value)
    return parsed.strftime('%H:%M') if parsed else None


def parse_flat(rows: List[str], header: Dict[str, int]) -> List[Lesson]:
    """
    Плоский формат: одна строка - одно занятие, колонки найдены по заголовку.
    Строки с неизвестным днем или некорректным временем пропускаются.
    """
    lessons = []

    for row in rows[1:]:
        fields = parse_line(row)

        day = is_day_of_week(_field(fields, header['day']))
        start_time = _strict_time(_field(fields, header['start_time']))
        end_time = _strict_time(_field(fields, header['end_time']))
        if not day or not start_time or not end_time:
            continue

        subject = _field(fields, header['subject'])
        teacher = _field(fields, header['teacher'])
        group = _field(fields, header['group'])
        classroom = _field(fields, header['classroom'])
        if not subject and not teacher and not group:
            continue

        lessons.append(Lesson(
            id=generate_lesson_id(day, start_time, group, len(lessons)),
            day_of_week=day,
            start_time=start_time,
            end_time=end_time,
            subject=subject or UNKNOWN_SUBJECT,
            teacher=teacher or UNKNOWN_TEACHER,
            group=group,
            classroom=classroom or EMPTY_CLASSROOM,
        ))

    return lessons
