# app/services/parsers/vertical_parser.py

import re
from typing import List, Optional

from .common_structs import Lesson, GroupColumn, ScheduleMetadata, TimeSlot
from .header_classifier import classify_row, parse_group_headers
from .tokenizer import parse_line
from .week_splitter import build_variants

from app.services.core.view_filter import generate_lesson_id
from app.services.utils.data_validator import parse_time_range, split_lesson_number
from app.services.utils.enums import RowKind


ERROR_MARKERS = ('#ERROR', '#REF')
TIME_FRAGMENT_PATTERN = re.compile(r'\d{1,2}[:.]\d{2}')


class VerticalParser:
    """
    Разбор вертикального формата: группы - тройки колонок, дни - строки-разделители.

    Время пар обычно указано только у первого дня; для следующих дней строки
    без времени получают время из слотов первого дня по порядку.
    Если в более позднем дне строк больше, чем слотов, лишние строки теряются.

    Экземпляр создается на один вызов разбора и после него не используется.
    """

    def __init__(self, metadata: Optional[ScheduleMetadata] = None):
        self.metadata = metadata or ScheduleMetadata()
        self.current_groups: List[GroupColumn] = []
        self.current_day: Optional[str] = None
        self.time_slots: List[TimeSlot] = []
        self.current_lesson_in_day = 0
        self.is_first_day = True
        self.previous_kind: Optional[RowKind] = None
        self.lessons: List[Lesson] = []

    def parse(self, rows: List[str]) -> List[Lesson]:
        for row in rows:
            fields = parse_line(row)
            kind, day = classify_row(fields, self.previous_kind)
            self.previous_kind = kind

            if kind in (RowKind.TITLE, RowKind.SUB_HEADER, RowKind.UNRECOGNIZED):
                continue
            if kind == RowKind.GROUP_HEADER:
                self.current_groups = parse_group_headers(fields)
                continue
            if kind == RowKind.DAY_MARKER:
                self._enter_day(day)
                # Строка с днем может одновременно содержать пару, если в первой ячейке время
                if parse_time_range(split_lesson_number(fields[0])[1]) is None:
                    continue

            self._parse_data_row(fields)

        return self.lessons

    def _enter_day(self, day: str):
        if self.current_day is not None and day != self.current_day:
            self.is_first_day = False
        self.current_day = day
        self.current_lesson_in_day = 0

    def _has_content(self, fields: List[str]) -> bool:
        return any(_cell(fields, g.subject_col) or _cell(fields, g.teacher_col) for g in self.current_groups)

    def _effective_time(self, fields: List[str]) -> Optional[TimeSlot]:
        first_cell = fields[0].strip()
        lesson_number, time_text = split_lesson_number(first_cell)
        time_range = parse_time_range(time_text)

        if time_range:
            slot = TimeSlot(start_time=time_range[0], end_time=time_range[1], lesson_number=lesson_number)
            if self.is_first_day and not any(
                    (s.start_time, s.end_time) == time_range for s in self.time_slots):
                self.time_slots.append(slot)
            self.current_lesson_in_day += 1
            return slot

        if not self.is_first_day and self.time_slots and self._has_content(fields):
            if self.current_lesson_in_day < len(self.time_slots):
                slot = self.time_slots[self.current_lesson_in_day]
                self.current_lesson_in_day += 1
                return slot
            return None

        # Время указано, но не распознано: сдвигаем счетчик, чтобы не сбить выравнивание слотов
        if TIME_FRAGMENT_PATTERN.search(first_cell):
            self.current_lesson_in_day += 1
        return None

    def _parse_data_row(self, fields: List[str]):
        if self.current_day is None or not self.current_groups:
            return

        slot = self._effective_time(fields)
        if slot is None:
            return

        for group in self.current_groups:
            subject = _cell(fields, group.subject_col)
            teacher = _cell(fields, group.teacher_col)
            classroom = _cell(fields, group.classroom_col)

            if not subject and not teacher and not classroom:
                continue
            if any(marker in subject for marker in ERROR_MARKERS):
                continue
            if not subject and not teacher:
                continue

            for variant in build_variants(subject, teacher, classroom):
                self.lessons.append(Lesson(
                    id=generate_lesson_id(self.current_day, slot.start_time, group.group_name, len(self.lessons)),
                    day_of_week=self.current_day,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    subject=variant.subject,
                    teacher=variant.teacher,
                    group=group.group_name,
                    classroom=variant.classroom,
                    lesson_number=slot.lesson_number,
                    week_number=variant.week_number,
                    format=self.metadata.default_format,
                ))


def _cell(fields: List[str], index: int) -> str:
    return fields[index].strip() if index < len(fields) else ''


def parse_vertical(rows: List[str], metadata: Optional[ScheduleMetadata] = None) -> List[Lesson]:
    return VerticalParser(metadata).parse(rows)
