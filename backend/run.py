import sys

from tracker import create_app, socketio
from tracker.errors import StateCorrupt


def main() -> int:
    try:
        app = create_app()
    except StateCorrupt as exc:
        # create_app already logged the details; refuse to serve a guessed state
        print(f'failed to load timer state: {exc}', file=sys.stderr)
        return 1

    host = app.config.get('HOST', '0.0.0.0')
    port = int(app.config.get('PORT', 8329))
    app.logger.info(f"server starting on http://localhost:{port}")
    try:
        socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
    except OSError as exc:
        app.logger.error(f"server failed: {exc}")
        return 1
    return 0


if __name__ == '__main__':
    # Werkzeug exits with status 1 on its own when the port is taken
    sys.exit(main())
