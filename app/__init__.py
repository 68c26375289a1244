import os
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from config import BASE_DIR


def create_app(config_object='config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)

    os.makedirs(app.config['DATA_DIR'], exist_ok=True)

    if not app.debug and not app.testing:
        logs_dir = os.path.join(BASE_DIR, 'logs')
        log_file = os.path.join(logs_dir, 'app.log')
        os.makedirs(logs_dir, exist_ok=True)

        file_handler = RotatingFileHandler(log_file, maxBytes=10240, backupCount=10, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)

        # Логгеры сервисов (app.services.*) пишут в тот же файл
        package_logger = logging.getLogger('app')
        package_logger.addHandler(file_handler)
        package_logger.setLevel(logging.INFO)

        app.logger.info('Приложение College Schedule запущено')

    from . import routes
    app.register_blueprint(routes.bp)

    from . import api_routes
    app.register_blueprint(api_routes.bp)

    return app
