# app/services/parsers/serializer.py

from typing import Iterable

from .common_structs import Lesson
from .tokenizer import DELIMITER, QUOTE

FLAT_HEADER = ('День', 'Час початку', 'Час закінчення', 'Предмет', 'Викладач', 'Група', 'Аудиторія')


def escape_field(value: str) -> str:
    """Берет поле в кавычки, если в нем есть разделитель, кавычка или перевод строки."""
    value = '' if value is None else str(value)
    if DELIMITER in value or QUOTE in value or '\n' in value:
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def lessons_to_text(lessons: Iterable[Lesson], include_header: bool = True) -> str:
    """
    Обратное преобразование: занятия -> текст в плоском формате.
    Номер недели и формат занятия не сохраняются.
    """
    rows = []
    if include_header:
        rows.append(DELIMITER.join(FLAT_HEADER))

    for lesson in lessons:
        rows.append(DELIMITER.join(escape_field(value) for value in (
            lesson.day_of_week,
            lesson.start_time,
            lesson.end_time,
            lesson.subject,
            lesson.teacher,
            lesson.group,
            lesson.classroom,
        )))

    return '\n'.join(rows)
