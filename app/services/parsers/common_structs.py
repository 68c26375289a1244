# app/services/parsers/common_structs.py

from dataclasses import dataclass, field
from typing import List, Optional

# Дни недели в том виде, в котором они хранятся в уроках
DAYS_OF_WEEK = ("Понеділок", "Вівторок", "Середа", "Четвер", "П'ятниця", "Субота")

FORMAT_ONLINE = "онлайн"
FORMAT_OFFLINE = "офлайн"

UNKNOWN_SUBJECT = "Невідомий предмет"
UNKNOWN_TEACHER = "Невідомий викладач"
EMPTY_CLASSROOM = "-"


@dataclass(frozen=True)
class Lesson:
    """
    Одно занятие в расписании. После создания не изменяется.
    Время всегда хранится в формате "ЧЧ:ММ".
    """
    id: str
    day_of_week: str
    start_time: str
    end_time: str
    subject: str
    teacher: str
    group: str
    classroom: str
    lesson_number: Optional[int] = None
    week_number: Optional[int] = None  # 1 или 2 для "мигалок"
    subgroup_number: Optional[int] = None
    format: Optional[str] = None


@dataclass(frozen=True)
class ScheduleMetadata:
    """Сведения уровня всей таблицы: неделя, формат обучения, семестр."""
    current_week: Optional[int] = None
    default_format: Optional[str] = None
    semester: Optional[str] = None


@dataclass(frozen=True)
class ParseError:
    row: int
    message: str


@dataclass(frozen=True)
class ParseResult:
    lessons: List[Lesson] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    metadata: Optional[ScheduleMetadata] = None


@dataclass(frozen=True)
class GroupColumn:
    """Группа из заголовка и три её колонки: предмет, викладач, аудиторія."""
    group_name: str
    subject_col: int
    teacher_col: int
    classroom_col: int


@dataclass(frozen=True)
class TimeSlot:
    start_time: str
    end_time: str
    lesson_number: Optional[int] = None


@dataclass(frozen=True)
class Variant:
    """Вариант занятия, полученный из одной ячейки (одна из половин "мигалки")."""
    subject: str
    teacher: str
    classroom: str
    week_number: Optional[int] = None


@dataclass(frozen=True)
class ScheduleFilters:
    search: Optional[str] = None
    group: Optional[str] = None
    teacher: Optional[str] = None
    classroom: Optional[str] = None
    week_number: Optional[int] = None
    subgroup: Optional[int] = None


@dataclass(frozen=True)
class FilterOptions:
    groups: List[str]
    teachers: List[str]
    classrooms: List[str]


@dataclass(frozen=True)
class ScheduleStatistics:
    total_lessons: int
    active_groups: int
    teachers: int
    classrooms: int
