# app/services/parsers/tokenizer.py

from typing import List

DELIMITER = ','
QUOTE = '"'


def split_into_rows(text: str) -> List[str]:
    """
    Делит текст таблицы на строки. Перевод строки внутри кавычек
    строку не разрывает. Символы '\\r' отбрасываются, пустые строки пропускаются.
    """
    rows = []
    current = []
    in_quotes = False

    for char in text:
        if char == '\r':
            continue
        if char == QUOTE:
            in_quotes = not in_quotes
        if char == '\n' and not in_quotes:
            rows.append(''.join(current))
            current = []
            continue
        current.append(char)

    rows.append(''.join(current))
    return [row for row in rows if row.strip()]


def _finish_field(current: str, quoted_from: int, quoted_to: int) -> str:
    # Содержимое кавычек возвращается как есть, обрезаются только края вне кавычек
    if quoted_from < 0:
        return current.strip()
    return current[:quoted_from].lstrip() + current[quoted_from:quoted_to] + current[quoted_to:].rstrip()


def parse_line(line: str) -> List[str]:
    """
    Разбирает одну строку на поля. Разделитель внутри кавычек поле не делит,
    удвоенная кавычка внутри кавычек означает саму кавычку.
    Незакрытая кавычка поглощает остаток строки.
    """
    fields = []
    current = ''
    in_quotes = False
    quoted_from, quoted_to = -1, -1
    i = 0

    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                current += QUOTE
                i += 1
            elif in_quotes:
                in_quotes = False
                quoted_to = len(current)
            else:
                in_quotes = True
                if quoted_from < 0:
                    quoted_from = len(current)
        elif char == DELIMITER and not in_quotes:
            fields.append(_finish_field(current, quoted_from, quoted_to))
            current = ''
            quoted_from, quoted_to = -1, -1
        else:
            current += char
        i += 1

    if in_quotes:
        quoted_to = len(current)
    fields.append(_finish_field(current, quoted_from, quoted_to))
    return fields
