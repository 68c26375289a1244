# app/services/parsers/week_splitter.py

import re
from typing import List, Optional

from .common_structs import Variant, UNKNOWN_SUBJECT, UNKNOWN_TEACHER, EMPTY_CLASSROOM
from .metadata_extractor import extract_week_number, WEEK_WORD


DASH_EQUIVALENTS = {'', '-', '–', '—'}

_WEEK1_MARKER = r'(?:(?<!\w)(?:І|I)|(?<!\d)1\s*(?:-?\s*(?i:й|а|ий|ша))?)\s*' + WEEK_WORD + r'[.:)\s-]*'
_WEEK2_MARKER = r'(?:(?<!\w)(?:ІІ|II)|(?<!\d)2\s*(?:-?\s*(?i:й|а|ий|га))?)\s*' + WEEK_WORD + r'[.:)\s-]*'

# "1 тиждень Математика / 2 тиждень Фізика"
EXPLICIT_SPLIT_PATTERN = re.compile(r'^\s*\(?' + _WEEK1_MARKER + r'(.*?)\s*/\s*\(?' + _WEEK2_MARKER + r'(.*)$', re.DOTALL)

# Остатки пометок недели внутри половинок: "(1 тиждень)", "тиждень 2:", "II тиж."
RESIDUAL_MARKER_PATTERNS = [
    re.compile(r'\(\s*(?:ІІ|II|І|I|[12])\s*-?\s*(?:(?i:й|а|ий|ша|га)\s*)?' + WEEK_WORD + r'\s*\)'),
    re.compile(r'(?<!\w)(?:ІІ|II|І|I)\s*-?\s*' + WEEK_WORD + r'[.:)]?'),
    re.compile(r'(?<!\d)[12]\s*(?:-?\s*(?i:й|а|ий|ша|га))?\s*' + WEEK_WORD + r'[.:)]?'),
    re.compile(WEEK_WORD + r'\s*[№#]?\s*[12](?!\d)[.:)]?'),
]


def _split_field(text: str) -> Optional[List[str]]:
    """Делит значение ячейки на две половины (неделя 1 / неделя 2) или возвращает None."""
    match = EXPLICIT_SPLIT_PATTERN.match(text)
    if match:
        return [match.group(1).strip(), match.group(2).strip()]

    # Голый "/" считается разделителем, только если он единственный
    if text.count('/') == 1:
        first, second = text.split('/')
        return [first.strip(), second.strip()]
    return None


def strip_week_markers(text: str) -> str:
    for pattern in RESIDUAL_MARKER_PATTERNS:
        text = pattern.sub(' ', text)
    return re.sub(r'\s+', ' ', text).strip(' ,;:-–—')


def _is_blank(value: str) -> bool:
    return value.strip() in DASH_EQUIVALENTS


def _make_variant(subject: str, teacher: str, classroom: str, week_number: Optional[int]) -> Variant:
    return Variant(
        subject=UNKNOWN_SUBJECT if _is_blank(subject) else subject,
        teacher=UNKNOWN_TEACHER if _is_blank(teacher) else teacher,
        classroom=EMPTY_CLASSROOM if _is_blank(classroom) else classroom,
        week_number=week_number,
    )


def build_variants(subject: str, teacher: str, classroom: str) -> List[Variant]:
    """
    Разбирает тройку ячеек группы на варианты занятия.

    Если хотя бы одно поле разделено на две половины ("Математика / Фізика"
    или "1 тиждень ... / 2 тиждень ..."), ячейка считается "мигалкой":
    неразделенные поля дублируются в обе половины, каждая непустая половина
    дает вариант с номером недели 1 или 2. Пустые обе половины - ни одного варианта.

    Без разделения возвращается один вариант; номер недели ставится,
    только если в ячейках есть пометка вроде "2 тиждень".
    """
    raw_fields = [subject or '', teacher or '', classroom or '']
    splits = [_split_field(value) for value in raw_fields]

    if any(splits):
        halves = [split or [value.strip(), value.strip()] for split, value in zip(splits, raw_fields)]
        variants = []
        for week_index in (0, 1):
            half_subject, half_teacher, half_classroom = (
                strip_week_markers(parts[week_index]) for parts in halves
            )
            if _is_blank(half_subject) and _is_blank(half_teacher):
                continue
            variants.append(_make_variant(half_subject, half_teacher, half_classroom, week_index + 1))
        return variants

    week_number = next((w for w in map(extract_week_number, raw_fields) if w), None)
    if week_number:
        cleaned = [strip_week_markers(value) for value in raw_fields]
        # Если после удаления пометки ничего не осталось, оставляем исходный текст
        cleaned = [c if c else value.strip() for c, value in zip(cleaned, raw_fields)]
    else:
        cleaned = [value.strip() for value in raw_fields]
    return [_make_variant(cleaned[0], cleaned[1], cleaned[2], week_number)]
