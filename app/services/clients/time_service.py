# app/services/clients/time_service.py

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, time, date
from typing import Optional

import requests

from config import Config
from app.services.parsers.common_structs import DAYS_OF_WEEK


log = logging.getLogger(__name__)


SUNDAY = "Неділя"
MONTHS_UK = [
    "січня", "лютого", "березня", "квітня", "травня", "червня",
    "липня", "серпня", "вересня", "жовтня", "листопада", "грудня"
]
TIME_OFFSET = timedelta(hours=Config.REGION_TIMEDELTA)


@dataclass(frozen=True)
class CurrentTimeInfo:
    day_name: str
    date_str_display: str  # '17 жовтня 2025 р.'
    date_obj: date
    time_obj: time

    @property
    def is_study_day(self) -> bool:
        return self.day_name in DAYS_OF_WEEK


def _server_datetime() -> Optional[datetime]:
    """Время по заголовку Date ответа сервера синхронизации, уже в часовом поясе колледжа."""
    try:
        response = requests.head(Config.TIME_SYNC_URL, timeout=Config.TIME_SYNC_TIMEOUT)
        response.raise_for_status()
        header = response.headers.get('Date')
        if not header:
            raise ValueError("Header 'Date' is missing")
        return datetime.strptime(header, '%a, %d %b %Y %H:%M:%S GMT') + TIME_OFFSET
    except (requests.exceptions.RequestException, ValueError) as e:
        log.warning(f"Не удалось получить время с сервера ({e}). Используется системное время.")
        return None


def format_date_uk(value: date) -> str:
    return f"{value.day} {MONTHS_UK[value.month - 1]} {value.year} р."


def get_current_day_and_time() -> CurrentTimeInfo:
    """Текущий день недели, дата и время в часовом поясе колледжа."""
    local_datetime = _server_datetime() or datetime.now()

    weekday = local_datetime.weekday()
    day_name = DAYS_OF_WEEK[weekday] if weekday < len(DAYS_OF_WEEK) else SUNDAY

    return CurrentTimeInfo(
        day_name=day_name,
        date_str_display=format_date_uk(local_datetime.date()),
        date_obj=local_datetime.date(),
        time_obj=local_datetime.time()
    )
