from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from werkzeug.exceptions import HTTPException

from asset_tracker.config import Config
from asset_tracker.errors import AssetTrackerError
from asset_tracker.logger import configure_logging, get_logger

db = SQLAlchemy()
logger = get_logger('app')


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def register_error_handlers(app):
    @app.errorhandler(AssetTrackerError)
    def handle_tracker_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.exception('Unhandled error')
        return jsonify({'error': 'InternalError', 'message': 'Internal server error'}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config['LOG_LEVEL'])
    db.init_app(app)
    register_error_handlers(app)

    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)

        @app.route('/api/health')
        def health():
            return jsonify({'status': 'ok', 'message': 'API is running'})

        # Import models and blueprints inside context
        from asset_tracker import models  # noqa: F401
        from asset_tracker.routes import assets_bp, employees_bp, assignments_bp

        app.register_blueprint(assets_bp)
        app.register_blueprint(employees_bp)
        app.register_blueprint(assignments_bp)

        # Create all database tables
        db.create_all()
        logger.info('Database ready at %s', db.engine.url.render_as_string(hide_password=True))

    return app
