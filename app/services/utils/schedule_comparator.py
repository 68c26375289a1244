# app/services/utils/schedule_comparator.py

import logging
from typing import Dict, Iterable, List, Tuple

from app.services.parsers.common_structs import Lesson

log = logging.getLogger(__name__)


SlotKey = Tuple[str, str, str, object]


def _get_lessons_as_dict(lessons: Iterable[Lesson]) -> Dict[SlotKey, Dict[str, str]]:
    """Превращает список занятий в словарь "слот -> содержимое" для легкого сравнения."""
    flat_lessons = {}
    for lesson in lessons:
        key = (lesson.day_of_week, lesson.start_time, lesson.group, lesson.week_number)
        flat_lessons[key] = {
            'subject': lesson.subject,
            'teacher': lesson.teacher,
            'classroom': lesson.classroom,
        }
    return flat_lessons


def _describe(key: SlotKey) -> Dict[str, object]:
    return {'day': key[0], 'start_time': key[1], 'group': key[2], 'week_number': key[3]}


def compare_lessons(old_lessons: List[Lesson], new_lessons: List[Lesson]) -> Dict[str, list]:
    """
    Сравнивает два набора занятий и возвращает словарь с изменениями:
    'modified', 'added', 'removed'. Пустой словарь - изменений нет.
    """
    old = _get_lessons_as_dict(old_lessons)
    new = _get_lessons_as_dict(new_lessons)

    old_keys = set(old.keys())
    new_keys = set(new.keys())

    changes = {
        'modified': [],
        'added': [],
        'removed': []
    }

    # 1. Изменения в существующих слотах
    for key in sorted(old_keys & new_keys, key=str):
        if old[key] != new[key]:
            changes['modified'].append({**_describe(key), 'old': old[key], 'new': new[key]})

    # 2. Добавленные занятия
    for key in sorted(new_keys - old_keys, key=str):
        changes['added'].append({**_describe(key), 'new': new[key]})

    # 3. Удаленные занятия
    for key in sorted(old_keys - new_keys, key=str):
        changes['removed'].append({**_describe(key), 'old': old[key]})

    if not any(changes.values()):
        log.info("Изменений в расписании не обнаружено.")
        return {}

    log.info(
        f"Обнаружены изменения в расписании: {len(changes['modified'])} изм., "
        f"{len(changes['added'])} доб., {len(changes['removed'])} убрано.")
    return changes
