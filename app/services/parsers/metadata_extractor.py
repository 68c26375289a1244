# app/services/parsers/metadata_extractor.py

import re
from typing import List, Optional, Sequence, Union

from .common_structs import ScheduleMetadata, FORMAT_ONLINE, FORMAT_OFFLINE
from .header_classifier import is_group_header, has_subject_or_teacher_label, classify_row
from .tokenizer import parse_line

from app.services.utils.enums import RowKind


WEEK_SCAN_ROWS = 5
FORMAT_SCAN_ROWS = 10
# Ячейки, в которые вручную вписывают номер текущей недели (4-я..7-я)
WEEK_CELL_RANGE = slice(3, 7)

WEEK_WORD = r'(?i:тиж(?:день|ня|ні)?\.?|недел[яиюе]|нед\.?)'

WEEK_PATTERNS = [
    (re.compile(r'(?<!\w)(ІІ|II)\s*-?\s*' + WEEK_WORD), 2),
    (re.compile(r'(?<!\w)(І|I)\s*-?\s*' + WEEK_WORD), 1),
    (re.compile(r'(?<!\d)1\s*(?:-?\s*(?i:й|а|ий|ша))?\s*' + WEEK_WORD), 1),
    (re.compile(r'(?<!\d)2\s*(?:-?\s*(?i:й|а|ий|га))?\s*' + WEEK_WORD), 2),
    (re.compile(WEEK_WORD + r'\s*[№#]?\s*1(?!\d)'), 1),
    (re.compile(WEEK_WORD + r'\s*[№#]?\s*2(?!\d)'), 2),
    (re.compile(r'(?i:перш(?:ий|а|ого)|перв(?:ая|ый|ой))\s+' + WEEK_WORD), 1),
    (re.compile(r'(?i:друг(?:ий|а|ого)|втор(?:ая|ой))\s+' + WEEK_WORD), 2),
]

WEEK_TOKENS = {
    '1': 1, '2': 2,
    'I': 1, 'II': 2, 'І': 1, 'ІІ': 2,
    'ПЕРШИЙ': 1, 'ПЕРША': 1, 'ДРУГИЙ': 2, 'ДРУГА': 2,
    'ПЕРВАЯ': 1, 'ВТОРАЯ': 2,
}

ONLINE_MARKERS = ('онлайн', 'дистанц', 'online')
OFFLINE_MARKERS = ('офлайн', 'очн', 'аудитор', 'offline')

SEMESTER_PATTERN = re.compile(
    r'\d\s*семестр\w*\s*\d{4}\s*[-–/]\s*\d{4}\s*(?:н\.\s*р\.?|н\.?р\.?|навч\.\s*р(?:ік|оку)?\.?|уч\.\s*г\.?)',
    re.IGNORECASE
)


def extract_week_number(text: str) -> Optional[int]:
    """Ищет в тексте пометку недели: "1 тиждень", "тиждень 2", "II тиждень" и т.п."""
    if not text:
        return None
    for pattern, week in WEEK_PATTERNS:
        if pattern.search(text):
            return week
    return None


def extract_lesson_format(text: str) -> Optional[str]:
    if not text:
        return None
    lowered = text.lower()
    if any(marker in lowered for marker in ONLINE_MARKERS):
        return FORMAT_ONLINE
    if any(marker in lowered for marker in OFFLINE_MARKERS):
        return FORMAT_OFFLINE
    return None


def extract_semester(text: str) -> Optional[str]:
    if not text:
        return None
    match = SEMESTER_PATTERN.search(text)
    return match.group(0).strip() if match else None


def _week_from_row(fields: List[str], in_preamble: bool) -> Optional[int]:
    """
    В строках таблицы учитываются только отдельные токены в 4-7 ячейках,
    иначе пометка недели у самого занятия станет неделей всего листа.
    Фразы вида "1 тиждень онлайн" ищутся только до заголовка групп.
    """
    for cell in fields[WEEK_CELL_RANGE]:
        token = cell.strip().upper()
        if token in WEEK_TOKENS:
            return WEEK_TOKENS[token]
        if in_preamble:
            week = extract_week_number(cell)
            if week:
                return week
    if in_preamble:
        return extract_week_number(' '.join(fields))
    return None


def extract_metadata(rows: Sequence[Union[str, List[str]]]) -> ScheduleMetadata:
    """
    Извлекает метаданные из первых строк таблицы: текущую неделю (первые 5 строк),
    формат обучения и семестр (первые 10 строк). Во всех случаях побеждает
    первое найденное значение. Ошибки не возникают: чего нет, то остается None.
    """
    current_week, default_format, semester = None, None, None
    in_preamble = True

    for index, row in enumerate(rows[:FORMAT_SCAN_ROWS]):
        fields = parse_line(row) if isinstance(row, str) else list(row)
        text = ' '.join(f.strip() for f in fields if f.strip())

        if in_preamble and classify_row(fields)[0] in (RowKind.GROUP_HEADER, RowKind.DAY_MARKER):
            in_preamble = False

        if current_week is None and index < WEEK_SCAN_ROWS:
            current_week = _week_from_row(fields, in_preamble)

        # Подписи "Аудиторія" в заголовке групп не означают офлайн-формат
        if default_format is None and not (is_group_header(fields) or has_subject_or_teacher_label(fields)):
            default_format = extract_lesson_format(text)

        if semester is None:
            semester = extract_semester(text)

    return ScheduleMetadata(current_week=current_week, default_format=default_format, semester=semester)
