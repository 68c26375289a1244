# app/services/utils/excel_reader.py

import io
import logging
from datetime import datetime, time
from typing import BinaryIO, Union

import pandas as pd

from app.services.parsers.serializer import escape_field

log = logging.getLogger(__name__)


class ExcelReadError(Exception):
    """Файл не удалось прочитать как таблицу Excel."""


def _cell_to_text(value) -> str:
    """Приводит значение ячейки к тексту так, как оно выглядит в таблице."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value.strip()
    if pd.isna(value):
        return ''
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        # Дата без времени - это дата, а не время пары
        if value.time() == time(0, 0):
            return value.strftime('%d.%m.%Y')
        return value.strftime('%H:%M')
    if isinstance(value, time):
        return value.strftime('%H:%M')
    return str(value).strip()


def excel_to_text(source: Union[str, bytes, BinaryIO]) -> str:
    """
    Читает первый лист Excel-файла и возвращает его как текст с разделителями,
    пригодный для parse_schedule. Бросает ExcelReadError, если файл не читается.
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    try:
        df = pd.read_excel(source, sheet_name=0, header=None, engine='calamine')
    except Exception as e:
        log.error(f"Не удалось открыть Excel-файл. Ошибка: {e}")
        raise ExcelReadError(f"Не вдалося прочитати Excel файл: {e}") from e

    if df.empty:
        raise ExcelReadError("Excel файл порожній")

    lines = []
    for row in df.itertuples(index=False):
        lines.append(','.join(escape_field(_cell_to_text(value)) for value in row))

    log.info(f"Excel-файл прочитан: {len(lines)} строк, {len(df.columns)} колонок.")
    return '\n'.join(lines)
