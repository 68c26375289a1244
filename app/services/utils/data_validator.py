# app/services/utils/data_validator.py

import re
from datetime import time
from typing import Optional, Tuple

from app.services.parsers.common_structs import DAYS_OF_WEEK

# Названия дней в верхнем регистре -> каноническое название.
# Русские названия остались от старого шаблона загрузки Excel.
DAY_NAME_MAP = {
    'ПОНЕДІЛОК': 'Понеділок',
    'ВІВТОРОК': 'Вівторок',
    'СЕРЕДА': 'Середа',
    'ЧЕТВЕР': 'Четвер',
    "П'ЯТНИЦЯ": "П'ятниця",
    'П’ЯТНИЦЯ': "П'ятниця",
    'ПʼЯТНИЦЯ': "П'ятниця",
    'ПЯТНИЦЯ': "П'ятниця",
    'СУБОТА': 'Субота',
    'ПОНЕДЕЛЬНИК': 'Понеділок',
    'ВТОРНИК': 'Вівторок',
    'СРЕДА': 'Середа',
    'ЧЕТВЕРГ': 'Четвер',
    'ПЯТНИЦА': "П'ятниця",
    'СУББОТА': 'Субота',
}

TIME_RANGE_PATTERN = re.compile(r'^(\d{1,2}:\d{2})\s*[-–]\s*(\d{1,2}:\d{2})$')
STRICT_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')
LESSON_NUMBER_PATTERN = re.compile(r'^(\d{1,2})\s*[).]\s*(.*)$')


def is_day_of_week(cell: str) -> Optional[str]:
    """
    Возвращает каноническое название дня, если ячейка содержит день недели.
    Регистр и пробелы по краям не учитываются.
    """
    if not isinstance(cell, str):
        return None
    return DAY_NAME_MAP.get(cell.strip().upper())


def normalize_time(time_str: str) -> str:
    """Дополняет часы ведущим нулём: '9:00' -> '09:00'."""
    hours, minutes = time_str.split(':')
    return f"{hours.zfill(2)}:{minutes}"


def parse_time_range(time_str: str) -> Optional[Tuple[str, str]]:
    """
    Разбирает диапазон вида "9:00-10:20" (или с длинным тире).
    Возвращает (начало, конец) в формате "ЧЧ:ММ" или None.
    """
    if not isinstance(time_str, str):
        return None
    match = TIME_RANGE_PATTERN.match(time_str)
    if not match:
        return None
    return normalize_time(match.group(1)), normalize_time(match.group(2))


def split_lesson_number(cell: str) -> Tuple[Optional[int], str]:
    """Отделяет номер пары от времени: '1) 8:30-9:50' -> (1, '8:30-9:50')."""
    match = LESSON_NUMBER_PATTERN.match(cell.strip())
    if match:
        return int(match.group(1)), match.group(2).strip()
    return None, cell.strip()


def parse_time_str(time_str: str) -> Optional[time]:
    """Строго парсит время "Ч:ММ" или "ЧЧ:ММ"."""
    match = STRICT_TIME_PATTERN.match(str(time_str).strip())
    if match:
        h, m = map(int, match.groups())
        if 0 <= h < 24 and 0 <= m < 60:
            return time(h, m)
    return None


def time_to_minutes(time_str: str) -> int:
    hours, minutes = time_str.split(':')
    return int(hours) * 60 + int(minutes)


def day_index(day_name: str) -> int:
    """Порядковый номер дня в неделе; неизвестные дни идут в конец."""
    try:
        return DAYS_OF_WEEK.index(day_name)
    except ValueError:
        return len(DAYS_OF_WEEK)
