# app/services/parsers/schedule_parser.py

import logging

from .common_structs import ParseResult, ParseError, ScheduleMetadata
from .flat_parser import parse_flat
from .header_classifier import detect_flat_header
from .metadata_extractor import extract_metadata
from .tokenizer import split_into_rows, parse_line
from .vertical_parser import parse_vertical


log = logging.getLogger(__name__)

MIN_VERTICAL_ROWS = 3


def parse_schedule(raw_text: str) -> ParseResult:
    """
    Главная функция парсера. Принимает текст таблицы (CSV из Google Sheets
    или сконвертированный Excel) и возвращает занятия, ошибки и метаданные.

    Никогда не бросает исключений: при неверном входе возвращается пустой
    список занятий и одна ошибка в ParseResult.errors.
    """
    if not isinstance(raw_text, str):
        return ParseResult(lessons=[], errors=[ParseError(row=0, message="Invalid input")])

    try:
        rows = split_into_rows(raw_text)

        # 1. Плоский формат определяется по первой строке
        flat_header = detect_flat_header(parse_line(rows[0])) if rows else None
        if flat_header:
            return ParseResult(lessons=parse_flat(rows, flat_header), errors=[], metadata=ScheduleMetadata())

        if len(rows) < MIN_VERTICAL_ROWS:
            return ParseResult(lessons=[], errors=[ParseError(row=0, message="Not enough data rows")])

        # 2. Вертикальный формат с метаданными из первых строк
        metadata = extract_metadata(rows)
        lessons = parse_vertical(rows, metadata)
        return ParseResult(lessons=lessons, errors=[], metadata=metadata)
    except Exception as e:
        log.error(f"Непредвиденная ошибка при разборе таблицы: {e}", exc_info=True)
        return ParseResult(lessons=[], errors=[ParseError(row=0, message=f"Parse failure: {e}")])
