from flask import Blueprint, jsonify, request, current_app
from tracker import get_store, socketio
from tracker.errors import InvalidInput, PersistenceFailed
from tracker.services.timer import STARTED, STOPPED, RESET, offset_seconds_for


timer = Blueprint('timer', __name__)


def _parse_offset_hours() -> float:
    """Read ``offset_hours`` from the start request body, if any."""
    if not request.get_data():
        return 0.0
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise InvalidInput('invalid json')
    if not isinstance(data, dict):
        raise InvalidInput('request body must be a JSON object')
    offset = data.get('offset_hours', 0)
    if offset is None:
        return 0.0
    if isinstance(offset, bool) or not isinstance(offset, (int, float)):
        raise InvalidInput('offset_hours must be a number')
    # rejects NaN, Infinity and values too large to count in seconds
    offset_seconds_for(offset)
    return float(offset)


def _broadcast_state() -> None:
    socketio.emit('timer_state', get_store().snapshot(), namespace='/ws')


@timer.errorhandler(InvalidInput)
def handle_invalid_input(exc):
    return jsonify({'error': str(exc), 'kind': exc.kind}), 400


@timer.errorhandler(PersistenceFailed)
def handle_persistence_failed(exc):
    return jsonify({'error': 'failed to save state', 'kind': exc.kind}), 500


@timer.route('/timer', methods=['GET'])
def get_timer():
    return jsonify(get_store().snapshot())


@timer.route('/start', methods=['POST'])
def start_timer():
    offset_hours = _parse_offset_hours()
    status = get_store().start(offset_hours)
    if status == STARTED:
        _broadcast_state()
    else:
        current_app.logger.debug("[start] timer already running")
    return jsonify({'status': status})


@timer.route('/stop', methods=['POST'])
def stop_timer():
    status = get_store().stop()
    if status == STOPPED:
        _broadcast_state()
    return jsonify({'status': status})


@timer.route('/reset', methods=['POST'])
def reset_timer():
    status = get_store().reset()
    if status == RESET:
        _broadcast_state()
    return jsonify({'status': status})
