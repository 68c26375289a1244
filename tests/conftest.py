import pytest

from app.services.parsers.common_structs import Lesson


VERTICAL_SAMPLE = """2 семестр 2024-2025 н.р.
1 тиждень онлайн
Час,КН-21,,,КН-22,,
,Предмет,Викладач,Аудиторія,Предмет,Викладач,Аудиторія
Понеділок
09:00-10:30,Математика,Іванов,101,Фізика,Петров,202
10:40-12:10,Алгебра,Сидоренко,103,Хімія,Коваленко,204"""


@pytest.fixture
def vertical_sample() -> str:
    return VERTICAL_SAMPLE


@pytest.fixture
def make_lesson():
    """Фабрика занятий с разумными значениями по умолчанию."""
    counter = {'n': 0}

    def _make(**overrides) -> Lesson:
        counter['n'] += 1
        values = dict(
            id=f"lesson-{counter['n']}",
            day_of_week="Понеділок",
            start_time="09:00",
            end_time="10:30",
            subject="Математика",
            teacher="Іванов",
            group="КН-21",
            classroom="101",
        )
        values.update(overrides)
        return Lesson(**values)

    return _make
