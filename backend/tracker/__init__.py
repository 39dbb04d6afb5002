import logging

from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def get_store():
    """Return the timer store owned by the current application."""
    return current_app.extensions['timer_store']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')), logging.INFO))

    origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # Load persisted state before serving; StateCorrupt propagates to the caller
    from tracker.services.timer import TimerStore
    store = TimerStore(flask_app.config['TIMER_STATE_FILE'], logger=flask_app.logger)
    store.load()
    flask_app.extensions['timer_store'] = store

    # Import and register blueprints here
    from tracker.main import main
    flask_app.register_blueprint(main)

    from tracker.api.timer import timer
    flask_app.register_blueprint(timer, url_prefix='/api')

    from tracker.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('timer-status')
    def timer_status_command():
        """Prints the elapsed time and whether the timer is running."""
        with flask_app.app_context():
            snap = get_store().snapshot()
        status = 'running' if snap['is_running'] else 'stopped'
        click.echo(f"{snap['elapsed_formatted']} ({status})")

    @click.command('timer-reset')
    def timer_reset_command():
        """Resets the timer to zero and persists the empty state."""
        from tracker.errors import TimerError
        with flask_app.app_context():
            try:
                get_store().reset()
            except TimerError as exc:
                raise click.ClickException(str(exc)) from exc
        click.echo('Timer has been reset!')

    flask_app.cli.add_command(timer_status_command)
    flask_app.cli.add_command(timer_reset_command)

    return flask_app
