# app/utils.py

from datetime import datetime, time as time_obj
from dataclasses import is_dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

from app.services.parsers.common_structs import Lesson, ScheduleMetadata, ScheduleFilters


def _to_camel(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part.capitalize() for part in tail)


def make_json_serializable(data):
    """
    Рекурсивно преобразует объекты, которые не сериализуются в JSON,
    в подходящий формат (строки, словари, списки).
    Поля дата-классов переименовываются в camelCase, пустые опциональные поля опускаются.
    """
    # Этот блок должен быть первым
    if is_dataclass(data) and not isinstance(data, type):
        result = {}
        for f in fields(data):
            value = getattr(data, f.name)
            if value is None:
                continue
            result[_to_camel(f.name)] = make_json_serializable(value)
        return result

    if isinstance(data, dict):
        return {k: make_json_serializable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [make_json_serializable(i) for i in data]
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, time_obj):
        return data.strftime('%H:%M')

    return data


def lesson_from_dict(data: Dict[str, Any]) -> Lesson:
    """Восстанавливает Lesson из словаря кэша (ключи в camelCase)."""
    return Lesson(
        id=data['id'],
        day_of_week=data['dayOfWeek'],
        start_time=data['startTime'],
        end_time=data['endTime'],
        subject=data['subject'],
        teacher=data['teacher'],
        group=data['group'],
        classroom=data['classroom'],
        lesson_number=data.get('lessonNumber'),
        week_number=data.get('weekNumber'),
        subgroup_number=data.get('subgroupNumber'),
        format=data.get('format'),
    )


def metadata_from_dict(data: Optional[Dict[str, Any]]) -> ScheduleMetadata:
    data = data or {}
    return ScheduleMetadata(
        current_week=data.get('currentWeek'),
        default_format=data.get('defaultFormat'),
        semester=data.get('semester'),
    )


def _int_or_none(value: Optional[str]) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number in (1, 2) else None


def filters_from_args(args) -> ScheduleFilters:
    """Собирает фильтры из параметров запроса (?group=...&week=1)."""
    return ScheduleFilters(
        search=args.get('search') or None,
        group=args.get('group') or None,
        teacher=args.get('teacher') or None,
        classroom=args.get('classroom') or None,
        week_number=_int_or_none(args.get('week')),
        subgroup=_int_or_none(args.get('subgroup')),
    )
