# app/services/parsers/header_classifier.py

from typing import Dict, List, Optional, Tuple

from .common_structs import GroupColumn

from app.services.utils.data_validator import is_day_of_week
from app.services.utils.enums import RowKind


TITLE_MARKERS = ('РОЗКЛАД', 'РАСПИСАНИЕ')
TIME_LABELS = {'час', 'время'}
SUBJECT_LABELS = {'предмет'}
TEACHER_LABELS = {'викладач', 'преподаватель'}
RESERVED_WORDS = {'час', 'время', 'предмет', 'викладач', 'преподаватель',
                  'аудиторія', 'аудиторiя', 'аудитория', ''}

# Колонки плоского формата и их допустимые подписи (укр./рус.)
FLAT_HEADER_LABELS = {
    'day': {'день', 'день тижня', 'день недели'},
    'start_time': {'час початку', 'время начала'},
    'end_time': {'час закінчення', 'время окончания'},
    'subject': {'предмет'},
    'teacher': {'викладач', 'преподаватель'},
    'group': {'група', 'группа'},
    'classroom': {'аудиторія', 'аудиторiя', 'аудитория'},
}


def detect_flat_header(fields: List[str]) -> Optional[Dict[str, int]]:
    """
    Пытается распознать заголовок плоского формата.
    Возвращает словарь "роль колонки -> индекс", если найдены все семь колонок,
    иначе None (тогда используется вертикальный парсер).
    """
    columns = {}
    for i, cell in enumerate(fields):
        label = cell.strip().lower()
        for role, labels in FLAT_HEADER_LABELS.items():
            if role not in columns and label in labels:
                columns[role] = i
                break

    if len(columns) != len(FLAT_HEADER_LABELS):
        return None
    return columns


def _lowered(fields: List[str]) -> List[str]:
    return [f.strip().lower() for f in fields]


def has_subject_or_teacher_label(fields: List[str]) -> bool:
    cells = _lowered(fields)
    return any(c in SUBJECT_LABELS or c in TEACHER_LABELS for c in cells)


def is_group_header(fields: List[str]) -> bool:
    cells = _lowered(fields)
    if cells and cells[0] in TIME_LABELS:
        return True
    return any(c in SUBJECT_LABELS for c in cells) and any(c in TEACHER_LABELS for c in cells)


def parse_group_headers(header_row: List[str]) -> List[GroupColumn]:
    """Каждая непустая ячейка после первой - группа с тремя колонками подряд."""
    groups = []
    for i in range(1, len(header_row)):
        cell = header_row[i].strip()
        if cell.lower() not in RESERVED_WORDS:
            groups.append(GroupColumn(
                group_name=cell, subject_col=i, teacher_col=i + 1, classroom_col=i + 2
            ))
    return groups


def classify_row(fields: List[str], previous_kind: Optional[RowKind] = None) -> Tuple[RowKind, Optional[str]]:
    """
    Определяет тип строки вертикального формата. Порядок проверок:
    1. TITLE - первая ячейка содержит слово "РОЗКЛАД";
    2. SUB_HEADER - строка сразу после заголовка групп с подписями "Предмет"/"Викладач";
    3. GROUP_HEADER - первая ячейка "Час" или в строке есть и "Предмет", и "Викладач";
    4. DAY_MARKER - какая-либо ячейка содержит день недели (день возвращается вторым элементом);
    5. DATA_ROW - есть хотя бы одна непустая ячейка;
    6. UNRECOGNIZED - всё остальное.
    """
    first_cell = fields[0].strip() if fields else ''

    if any(marker in first_cell.upper() for marker in TITLE_MARKERS):
        return RowKind.TITLE, None

    if previous_kind == RowKind.GROUP_HEADER and has_subject_or_teacher_label(fields):
        return RowKind.SUB_HEADER, None

    if is_group_header(fields):
        return RowKind.GROUP_HEADER, None

    day = is_day_of_week(first_cell)
    if not day:
        day = next((d for d in map(is_day_of_week, fields) if d), None)
    if day:
        return RowKind.DAY_MARKER, day

    if any(f.strip() for f in fields):
        return RowKind.DATA_ROW, None
    return RowKind.UNRECOGNIZED, None
