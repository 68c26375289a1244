# app/services/utils/enums.py

from enum import Enum, auto


class RowKind(Enum):
    """Тип строки таблицы в вертикальном формате."""
    TITLE = auto()
    GROUP_HEADER = auto()
    SUB_HEADER = auto()
    DAY_MARKER = auto()
    DATA_ROW = auto()
    UNRECOGNIZED = auto()


class FetchErrorType(Enum):
    """Категории ошибок загрузки таблицы из Google Sheets."""
    CONFIG = 'config'
    NETWORK = 'network'
    HTTP = 'http'
    TIMEOUT = 'timeout'


class UpdateStatus(Enum):
    """Статусы завершения операции обновления исходной таблицы."""
    SKIPPED = auto()  # Текст таблицы не менялся
    SUCCESS = auto()  # Таблица успешно загружена и разобрана
    FAILED = auto()  # Произошла ошибка
