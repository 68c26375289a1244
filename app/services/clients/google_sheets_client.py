# app/services/clients/google_sheets_client.py

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

import requests

from config import Config
from app.services.utils.enums import FetchErrorType


log = logging.getLogger(__name__)


GOOGLE_SHEETS_URL_PATTERNS = [
    re.compile(r'^https://docs\.google\.com/spreadsheets/d/[a-zA-Z0-9_-]+/export\?format=csv(&gid=\d+)?$'),
    re.compile(r'^https://docs\.google\.com/spreadsheets/d/[a-zA-Z0-9_-]+/gviz/tq\?tqx=out:csv(&gid=\d+)?$'),
    re.compile(r'^https://docs\.google\.com/spreadsheets/d/[a-zA-Z0-9_-]+/pub\?output=csv(&gid=\d+)?$'),
]


@dataclass(frozen=True)
class FetchResult:
    data: str
    fetched_at: datetime


@dataclass(frozen=True)
class FetchError:
    type: FetchErrorType
    message: str
    status: Optional[int] = None


def validate_google_sheets_url(url: str) -> bool:
    """Проверяет, что ссылка - публичный экспорт таблицы Google Sheets в CSV."""
    if not url or not isinstance(url, str):
        return False
    trimmed = url.strip()
    return any(pattern.match(trimmed) for pattern in GOOGLE_SHEETS_URL_PATTERNS)


def calculate_retry_delay(attempt: int, initial_delay: float, max_delay: float) -> float:
    return min(initial_delay * (2 ** attempt), max_delay)


def _fetch_once(url: str, timeout: float) -> Union[FetchResult, FetchError]:
    try:
        response = requests.get(url, timeout=timeout, headers={'Accept': 'text/csv, text/plain, */*'})
    except requests.exceptions.Timeout:
        return FetchError(type=FetchErrorType.TIMEOUT, message="Request timeout. Please try again later.")
    except requests.exceptions.RequestException as e:
        return FetchError(type=FetchErrorType.NETWORK, message=f"Network error: {e}")

    if not response.ok:
        return FetchError(
            type=FetchErrorType.HTTP,
            message=f"HTTP Error: {response.status_code} {response.reason}",
            status=response.status_code,
        )

    # Google отдает CSV в UTF-8, но не всегда указывает кодировку в заголовке
    response.encoding = 'utf-8'
    return FetchResult(data=response.text, fetched_at=datetime.now())


def fetch_google_sheets_csv(url: Optional[str] = None,
                            timeout: Optional[float] = None,
                            retries: Optional[int] = None,
                            initial_retry_delay: Optional[float] = None,
                            max_retry_delay: Optional[float] = None) -> Union[FetchResult, FetchError]:
    """
    Скачивает CSV из Google Sheets с повторными попытками.
    Задержка между попытками растет экспоненциально и ограничена сверху.
    Ошибки конфигурации и HTTP 4xx не повторяются.
    """
    timeout = Config.FETCH_TIMEOUT if timeout is None else timeout
    retries = Config.FETCH_RETRIES if retries is None else retries
    initial_retry_delay = Config.INITIAL_RETRY_DELAY if initial_retry_delay is None else initial_retry_delay
    max_retry_delay = Config.MAX_RETRY_DELAY if max_retry_delay is None else max_retry_delay

    if url is None:
        url = Config.GOOGLE_SHEETS_URL
        if not url:
            return FetchError(
                type=FetchErrorType.CONFIG,
                message="Google Sheets URL не налаштовано. Встановіть змінну середовища GOOGLE_SHEETS_URL.",
            )
    if not validate_google_sheets_url(url):
        return FetchError(type=FetchErrorType.CONFIG, message="Invalid Google Sheets URL format.")

    last_error = None
    for attempt in range(retries + 1):
        log.info(f"Загрузка таблицы из Google Sheets, попытка {attempt + 1} из {retries + 1}...")
        result = _fetch_once(url.strip(), timeout)

        if isinstance(result, FetchResult):
            log.info(f"Таблица успешно загружена ({len(result.data)} символов).")
            return result

        last_error = result
        if result.type == FetchErrorType.HTTP and result.status is not None and 400 <= result.status < 500:
            log.error(f"Google Sheets вернул ошибку клиента: {result.message}. Повтор не имеет смысла.")
            return result

        if attempt < retries:
            delay = calculate_retry_delay(attempt, initial_retry_delay, max_retry_delay)
            log.warning(f"Не удалось загрузить таблицу ({result.message}). Повтор через {delay} с.")
            time.sleep(delay)

    log.error(f"Не удалось загрузить таблицу после {retries + 1} попыток: {last_error.message}")
    return last_error
