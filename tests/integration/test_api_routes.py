import io
from datetime import date, time

import pytest

from config import Config
from app import create_app
from app.utils import make_json_serializable
from app.services.clients import time_service
from app.services.clients.time_service import CurrentTimeInfo
from app.services.core import cache_manager
from app.services.parsers.schedule_parser import parse_schedule


class ConfigForTests(Config):
    TESTING = True


@pytest.fixture
def cache_data(vertical_sample):
    result = parse_schedule(vertical_sample)
    return make_json_serializable({
        "lessons": result.lessons,
        "errors": result.errors,
        "metadata": result.metadata,
        "source": "upload",
        "updated_at": "2025-09-01T08:00:00",
    })


@pytest.fixture
def client(mocker, tmp_path, cache_data):
    mocker.patch.object(ConfigForTests, 'DATA_DIR', str(tmp_path))
    mocker.patch.object(cache_manager, 'get_schedule_data', return_value=cache_data)
    mocker.patch.object(time_service, 'get_current_day_and_time', return_value=CurrentTimeInfo(
        day_name="Понеділок",
        date_str_display="1 вересня 2025 р.",
        date_obj=date(2025, 9, 8),
        time_obj=time(9, 15),
    ))
    app = create_app(ConfigForTests)
    return app.test_client()


def test_lessons(client):
    response = client.get('/api/lessons')
    assert response.status_code == 200
    data = response.get_json()
    assert len(data) == 4
    assert data[0]['dayOfWeek'] == "Понеділок"
    assert data[0]['startTime'] == "09:00"
    assert data[0]['group'] == "КН-21"
    assert 'weekNumber' not in data[0]


def test_lessons_filtered(client):
    response = client.get('/api/lessons', query_string={'group': 'КН-22', 'search': 'хім'})
    assert [l['subject'] for l in response.get_json()] == ["Хімія"]


def test_statistics(client):
    data = client.get('/api/statistics').get_json()
    assert data == {'totalLessons': 4, 'activeGroups': 2, 'teachers': 4, 'classrooms': 4}


def test_filter_options(client):
    data = client.get('/api/filter-options').get_json()
    assert data['groups'] == ["КН-21", "КН-22"]
    assert data['classrooms'] == ["101", "103", "202", "204"]


def test_metadata_prefers_manual_week(client):
    data = client.get('/api/metadata').get_json()
    assert data['currentWeek'] == 1
    assert data['effectiveWeek'] == 1
    assert data['isManualWeek'] is True
    assert data['defaultFormat'] == "онлайн"


def test_cache_error_gives_500(client, mocker):
    mocker.patch.object(cache_manager, 'get_schedule_data', return_value={"error": "boom"})
    response = client.get('/api/lessons')
    assert response.status_code == 500
    assert "error" in response.get_json()


def test_export_csv(client):
    response = client.get('/api/export/csv', query_string={'group': 'КН-21'})
    text = response.get_data(as_text=True)
    assert response.mimetype == 'text/csv'
    assert text.startswith('\ufeffДень,Час початку')
    assert len(text.splitlines()) == 3


def test_template(client):
    response = client.get('/api/template')
    lines = response.get_data(as_text=True).lstrip('\ufeff').splitlines()
    assert len(lines) == 2
    assert parse_schedule('\n'.join(lines)).lessons[0].group == "КН-21"


def test_refresh_forces_update(client, cache_data):
    response = client.post('/api/refresh')
    assert response.status_code == 200
    assert response.get_json()['lessonsCount'] == 4
    cache_manager.get_schedule_data.assert_called_with(force_update=True)


def test_upload_without_file(client):
    response = client.post('/api/upload-schedule', data={}, content_type='multipart/form-data')
    assert response.status_code == 400


def test_upload_wrong_extension(client):
    response = client.post('/api/upload-schedule', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'data'), 'schedule.txt')})
    assert response.status_code == 400


def test_upload_unreadable_excel(client):
    response = client.post('/api/upload-schedule', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'not an excel file'), 'schedule.xlsx')})
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_upload_success(client, mocker, cache_data, vertical_sample):
    mocker.patch('app.api_routes.excel_to_text', return_value=vertical_sample)
    update = mocker.patch.object(cache_manager, 'update_from_upload', return_value=cache_data)

    response = client.post('/api/upload-schedule', content_type='multipart/form-data',
                           data={'file': (io.BytesIO(b'xlsx-bytes'), 'Розклад.xlsx')})

    assert response.status_code == 200
    assert response.get_json()['lessonsCount'] == 4
    update.assert_called_once_with(vertical_sample)


def test_root_redirects(client):
    response = client.get('/')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/schedule')


def test_schedule_page(client):
    response = client.get('/schedule')
    html = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Математика" in html
    assert "Тиждень 1" in html


def test_schedule_page_error(client, mocker):
    mocker.patch.object(cache_manager, 'get_schedule_data', return_value={"error": "boom"})
    response = client.get('/schedule')
    assert response.status_code == 500
    assert "boom" in response.get_data(as_text=True)


def test_export_html(client):
    response = client.get('/export/html')
    assert response.status_code == 200
    assert 'attachment' in response.headers['Content-Disposition']
    assert "Хімія" in response.get_data(as_text=True)
