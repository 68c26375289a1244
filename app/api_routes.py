# app/api_routes.py

import logging
import os
from flask import Blueprint, jsonify, request, Response
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config
from app.utils import make_json_serializable, filters_from_args, metadata_from_dict
from .services.clients import time_service
from .services.core import cache_manager, view_filter
from .services.parsers.common_structs import Lesson
from .services.parsers.serializer import lessons_to_text
from .services.utils.excel_reader import excel_to_text, ExcelReadError


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)

TEMPLATE_LESSON = Lesson(
    id='template',
    day_of_week="Понеділок",
    start_time="09:00",
    end_time="10:30",
    subject="Математика",
    teacher="Іванов І.І.",
    group="КН-21",
    classroom="101",
)


def _load_lessons():
    """Возвращает данные кэша и занятия; при ошибке кэша занятия равны None."""
    all_data = cache_manager.get_schedule_data()
    if all_data.get("error"):
        return all_data, None
    return all_data, cache_manager.get_lessons(all_data)


def _schedule_unavailable():
    return jsonify({"error": "Failed to get schedule data"}), 500


def _csv_response(text: str, filename: str) -> Response:
    # BOM нужен, чтобы Excel открыл кириллицу в UTF-8
    return Response(
        '\ufeff' + text,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )


@bp.route('/lessons')
def get_lessons():
    """Отдает отфильтрованные и отсортированные занятия в JSON."""
    all_data, lessons = _load_lessons()
    if lessons is None:
        return _schedule_unavailable()

    filters = filters_from_args(request.args)
    result = view_filter.sort_lessons_by_day_and_time(view_filter.filter_lessons(lessons, filters))
    log.info(f"API: отправлено {len(result)} из {len(lessons)} занятий.")
    return jsonify(make_json_serializable(result))


@bp.route('/statistics')
def get_statistics():
    all_data, lessons = _load_lessons()
    if lessons is None:
        return _schedule_unavailable()

    filtered = view_filter.filter_lessons(lessons, filters_from_args(request.args))
    return jsonify(make_json_serializable(view_filter.calculate_statistics(filtered)))


@bp.route('/filter-options')
def get_filter_options():
    all_data, lessons = _load_lessons()
    if lessons is None:
        return _schedule_unavailable()
    return jsonify(make_json_serializable(view_filter.extract_filter_options(lessons)))


@bp.route('/metadata')
def get_metadata():
    """Метаданные таблицы и неделя, которую нужно показывать сейчас."""
    all_data, lessons = _load_lessons()
    if lessons is None:
        return _schedule_unavailable()

    metadata = metadata_from_dict(all_data.get("metadata"))
    time_info = time_service.get_current_day_and_time()
    payload = make_json_serializable(metadata)
    payload.update({
        "effectiveWeek": view_filter.get_effective_week(metadata.current_week, time_info.date_obj),
        "isManualWeek": metadata.current_week is not None,
        "errors": all_data.get("errors", []),
        "updatedAt": all_data.get("updated_at"),
        "source": all_data.get("source"),
    })
    return jsonify(payload)


@bp.route('/upload-schedule', methods=['POST'])
def upload_schedule():
    """Принимает Excel-файл (поле 'file'), разбирает его и обновляет кэш."""
    try:
        uploaded = request.files.get('file')
    except RequestEntityTooLarge:
        return jsonify({"error": "Файл занадто великий. Максимальний розмір 10 МБ."}), 413

    if uploaded is None or not uploaded.filename:
        return jsonify({"error": "Файл не надано"}), 400

    extension = os.path.splitext(uploaded.filename)[1].lower()
    if extension not in Config.ALLOWED_UPLOAD_EXTENSIONS:
        return jsonify({"error": "Непідтримуваний формат файлу. Дозволені .xlsx та .xls"}), 400

    content = uploaded.read()
    if len(content) > Config.MAX_UPLOAD_SIZE:
        return jsonify({"error": "Файл занадто великий. Максимальний розмір 10 МБ."}), 413

    log.info(f"API: получен файл '{uploaded.filename}' ({len(content)} байт).")
    try:
        text = excel_to_text(content)
    except ExcelReadError as e:
        return jsonify({"error": str(e)}), 400

    all_data = cache_manager.update_from_upload(text)
    if all_data.get("error"):
        return jsonify({"error": all_data["error"]}), 400

    return jsonify({
        "message": "Розклад успішно завантажено",
        "lessonsCount": len(all_data.get("lessons", [])),
        "errors": all_data.get("errors", []),
        "metadata": all_data.get("metadata", {}),
    })


@bp.route('/export/csv')
def export_csv():
    all_data, lessons = _load_lessons()
    if lessons is None:
        return _schedule_unavailable()

    filtered = view_filter.filter_lessons(lessons, filters_from_args(request.args))
    text = lessons_to_text(view_filter.sort_lessons_by_day_and_time(filtered))
    log.info(f"API: выгружено {len(filtered)} занятий в CSV.")
    return _csv_response(text, 'schedule.csv')


@bp.route('/template')
def get_template():
    """Шаблон таблицы в плоском формате: заголовок и одна строка-пример."""
    return _csv_response(lessons_to_text([TEMPLATE_LESSON]), 'schedule_template.csv')


@bp.route('/refresh', methods=['POST'])
def refresh():
    all_data = cache_manager.get_schedule_data(force_update=True)
    if all_data.get("error"):
        return jsonify({"error": all_data["error"]}), 500

    log.info("API: кэш расписания обновлен по запросу.")
    return jsonify({
        "message": "Кэш оновлено",
        "lessonsCount": len(all_data.get("lessons", [])),
        "updatedAt": all_data.get("updated_at"),
    })
