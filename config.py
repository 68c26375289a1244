import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # Публичная ссылка на экспорт таблицы в CSV.
    # Если не задана, расписание берется из последнего загруженного Excel-файла.
    GOOGLE_SHEETS_URL = os.getenv('GOOGLE_SHEETS_URL', '').strip()

    DATA_DIR = os.getenv('DATA_DIR', os.path.join(BASE_DIR, 'data'))
    LOCAL_SCHEDULE_PATH = os.path.join(DATA_DIR, 'schedule.csv')
    CACHE_FILE_PATH = os.path.join(DATA_DIR, 'schedule_cache.json')

    CACHE_DURATION = int(os.getenv('CACHE_DURATION', 600))

    # --- Загрузка из Google Sheets ---
    FETCH_TIMEOUT = int(os.getenv('FETCH_TIMEOUT', 30))
    FETCH_RETRIES = int(os.getenv('FETCH_RETRIES', 3))
    INITIAL_RETRY_DELAY = int(os.getenv('INITIAL_RETRY_DELAY', 5))
    MAX_RETRY_DELAY = int(os.getenv('MAX_RETRY_DELAY', 30))

    # --- Загрузка Excel ---
    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', 10 * 1024 * 1024))
    MAX_CONTENT_LENGTH = MAX_UPLOAD_SIZE
    ALLOWED_UPLOAD_EXTENSIONS = {'.xlsx', '.xls'}

    # Часовой пояс колледжа относительно UTC
    REGION_TIMEDELTA = int(os.getenv('REGION_TIMEDELTA', 2))
    # Сервер, по заголовку Date которого определяется текущее время
    TIME_SYNC_URL = os.getenv('TIME_SYNC_URL', 'https://yandex.com/time/sync.json')
    TIME_SYNC_TIMEOUT = int(os.getenv('TIME_SYNC_TIMEOUT', 5))

    # Доля ошибочных строк, после которой в лог пишется предупреждение
    INVALID_ROWS_WARNING_RATIO = float(os.getenv('INVALID_ROWS_WARNING_RATIO', 0.1))
