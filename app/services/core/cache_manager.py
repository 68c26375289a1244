# app/services/core/cache_manager.py

import json
import logging
import os
import time
from datetime import datetime
from typing import List, Optional, Tuple
from threading import Lock

from config import Config
from app.utils import make_json_serializable, lesson_from_dict

from app.services.utils.enums import UpdateStatus
from app.services.utils.schedule_comparator import compare_lessons

from app.services.clients.google_sheets_client import fetch_google_sheets_csv, FetchError

from app.services.parsers.common_structs import Lesson, ParseResult
from app.services.parsers.schedule_parser import parse_schedule


log = logging.getLogger(__name__)
thread_lock = Lock()


def get_schedule_data(force_update: bool = False) -> dict:
    """
    Главная функция. Получает расписание из кэша или запускает его обновление.

    :param force_update: Флаг для принудительного обновления, игнорируя CACHE_DURATION.
    """
    cache_file = Config.CACHE_FILE_PATH

    try:
        os.makedirs(Config.DATA_DIR, exist_ok=True)
    except OSError as e:
        log.critical(f"Критическая ошибка: не удалось создать директорию '{Config.DATA_DIR}': {e}")
        return {"error": f"Не удалось создать рабочую директорию: {e}"}

    is_cache_stale = _is_stale(cache_file)
    if is_cache_stale:
        log.warning("Кэш расписания устарел или отсутствует (первичная проверка).")

    if is_cache_stale or force_update:
        if force_update:
            log.warning("Принудительное обновление кэша расписания инициировано.")

        with thread_lock:
            # Повторно проверяем, не обновил ли кто-то кэш, пока мы ждали блокировку.
            if _is_stale(cache_file) or force_update:
                log.info("Блокировка получена. Начинаю обновление кэша расписания.")
                success, message = _update_cache_file(cache_file)
                if not success:
                    return {"error": message}
            else:
                log.info("Блокировка получена, но кэш уже обновлен другим потоком. Обновление пропущено.")

    return _read_cache(cache_file)


def update_from_upload(text: str) -> dict:
    """
    Сохраняет текст загруженной таблицы как локальный источник и пересобирает кэш.
    Возвращает данные нового кэша или {"error": ...}.
    """
    try:
        os.makedirs(Config.DATA_DIR, exist_ok=True)
    except OSError as e:
        return {"error": f"Не удалось создать рабочую директорию: {e}"}

    with thread_lock:
        result = parse_schedule(text)
        if not result.lessons:
            message = result.errors[0].message if result.errors else "No lessons found"
            log.warning(f"Загруженный файл не содержит занятий: {message}")
            return {"error": message}

        _write_text(Config.LOCAL_SCHEDULE_PATH, text)
        _save_cache(Config.CACHE_FILE_PATH, result, source='upload')

    return _read_cache(Config.CACHE_FILE_PATH)


def get_lessons(cache_data: dict) -> List[Lesson]:
    """Восстанавливает объекты Lesson из данных кэша."""
    return [lesson_from_dict(item) for item in cache_data.get('lessons', [])]


def _is_stale(cache_file: str) -> bool:
    try:
        return (time.time() - os.path.getmtime(cache_file)) > Config.CACHE_DURATION
    except FileNotFoundError:
        return True


def _read_cache(cache_file: str) -> dict:
    try:
        with open(cache_file, 'r', encoding='utf-8') as f:
            log.info("Загрузка расписания из файла кэша.")
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        error_message = f"Критическая ошибка: не удалось прочитать файл кэша. {e}"
        log.error(error_message)
        return {"error": error_message}


def _read_text(path: str) -> Optional[str]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return None


def _write_text(path: str, text: str):
    temp_path = path + ".tmp"
    with open(temp_path, 'w', encoding='utf-8') as f:
        f.write(text)
    os.replace(temp_path, path)


def _download_source() -> UpdateStatus:
    """Скачивает таблицу из Google Sheets и сохраняет ее текст, если он изменился."""
    result = fetch_google_sheets_csv()
    if isinstance(result, FetchError):
        log.error(f"Не удалось загрузить таблицу из Google Sheets: [{result.type.value}] {result.message}")
        return UpdateStatus.FAILED

    if _read_text(Config.LOCAL_SCHEDULE_PATH) == result.data:
        log.info("Таблица в Google Sheets не изменилась.")
        return UpdateStatus.SKIPPED

    _write_text(Config.LOCAL_SCHEDULE_PATH, result.data)
    return UpdateStatus.SUCCESS


def _update_cache_file(cache_file: str) -> Tuple[bool, str]:
    """
    Внутренняя функция для скачивания, парсинга и сохранения данных в кэш.
    """
    local_path = Config.LOCAL_SCHEDULE_PATH

    # --- ШАГ 1: ОБНОВЛЯЕМ ЛОКАЛЬНУЮ КОПИЮ ИЗ GOOGLE SHEETS ---
    if Config.GOOGLE_SHEETS_URL:
        update_status = _download_source()
        source = 'google_sheets'
    else:
        log.info("GOOGLE_SHEETS_URL не задан. Используется последний загруженный файл.")
        update_status = UpdateStatus.FAILED
        source = 'upload'

    # Таблица не менялась и кэш уже есть: просто сбрасываем таймер.
    if update_status == UpdateStatus.SKIPPED and os.path.exists(cache_file):
        os.utime(cache_file, None)
        return True, "Таблица не изменилась. Обновление кэша пропущено."

    if update_status == UpdateStatus.FAILED:
        if os.path.exists(local_path):
            log.warning("Новая таблица недоступна. Используется старая локальная копия.")
        else:
            msg = "Критическая ошибка: не удалось ни загрузить таблицу, ни найти локальную копию."
            log.critical(msg)
            return False, msg

    # --- ШАГ 2: ПАРСИНГ ЛОКАЛЬНОЙ КОПИИ (новой или старой) ---
    text = _read_text(local_path)
    log.info(f"Парсинг таблицы '{local_path}'...")
    result = parse_schedule(text)
    if not result.lessons and result.errors:
        msg = f"Не удалось разобрать таблицу: {result.errors[0].message}"
        log.error(msg)
        return False, msg

    # --- ШАГ 3: СОХРАНЕНИЕ В КЭШ ---
    _save_cache(cache_file, result, source=source)
    msg = "Кэш расписания успешно обновлен."
    log.info(msg)
    return True, msg


def _save_cache(cache_file: str, result: ParseResult, source: str):
    """Сравнивает новые занятия со старым кэшем и атомарно записывает кэш."""
    old_data = _read_cache(cache_file) if os.path.exists(cache_file) else {}
    if old_data and not old_data.get("error"):
        try:
            changes = compare_lessons(get_lessons(old_data), result.lessons)
            if changes:
                log.warning(f"Обнаружены изменения в расписании: {changes}")
        except (KeyError, TypeError) as e:
            log.error(f"Ошибка при сравнении со старым кэшем: {e}", exc_info=True)

    total = len(result.lessons) + len(result.errors)
    if total and len(result.errors) / total > Config.INVALID_ROWS_WARNING_RATIO:
        log.warning(f"Много ошибочных строк: {len(result.errors)} из {total}.")

    all_data = make_json_serializable({
        "lessons": result.lessons,
        "errors": result.errors,
        "metadata": result.metadata,
        "source": source,
        "updated_at": datetime.now(),
    })

    temp_cache_file = cache_file + ".tmp"
    with open(temp_cache_file, 'w', encoding='utf-8') as f:
        json.dump(all_data, f, ensure_ascii=False, indent=2)

    os.replace(temp_cache_file, cache_file)
    log.info(f"В кэш записано {len(result.lessons)} занятий (источник: {source}).")
