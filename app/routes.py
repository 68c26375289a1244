# app/routes.py

import logging
from itertools import groupby
from flask import Blueprint, render_template, redirect, url_for, request, make_response

from app.utils import filters_from_args, metadata_from_dict
from .services.clients import time_service
from .services.core import view_filter, cache_manager

log = logging.getLogger(__name__)
bp = Blueprint('main', __name__)


@bp.route('/')
def root():
    return redirect(url_for('main.schedule'))


def _render_schedule_page(standalone: bool = False):
    all_data = cache_manager.get_schedule_data()
    if all_data.get("error"):
        return render_template('error.html', message=f"Помилка завантаження даних: {all_data['error']}"), 500

    time_info = time_service.get_current_day_and_time()
    metadata = metadata_from_dict(all_data.get("metadata"))
    effective_week = view_filter.get_effective_week(metadata.current_week, time_info.date_obj)

    filters = filters_from_args(request.args)
    all_lessons = cache_manager.get_lessons(all_data)
    lessons = view_filter.sort_lessons_by_day_and_time(view_filter.filter_lessons(all_lessons, filters))

    lessons_by_day = [(day, list(items)) for day, items in groupby(lessons, key=lambda l: l.day_of_week)]

    return render_template(
        'schedule.html',
        lessons_by_day=lessons_by_day,
        statistics=view_filter.calculate_statistics(lessons),
        filter_options=view_filter.extract_filter_options(all_lessons),
        filters=filters,
        metadata=metadata,
        effective_week=effective_week,
        is_manual_week=metadata.current_week is not None,
        active_day_name=time_info.day_name,
        is_weekend=not time_info.is_study_day,
        current_date=time_info.date_str_display,
        standalone=standalone,
    )


@bp.route('/schedule')
def schedule():
    return _render_schedule_page()


@bp.route('/export/html')
def export_html():
    page = _render_schedule_page(standalone=True)
    if isinstance(page, tuple):
        return page

    response = make_response(page)
    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    response.headers['Content-Disposition'] = 'attachment; filename=schedule.html'
    log.info("Расписание выгружено в HTML.")
    return response
