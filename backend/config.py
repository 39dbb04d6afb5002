import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Persisted timer record, rewritten on every start/stop/reset
    TIMER_STATE_FILE = os.environ.get('TIMER_STATE_FILE') or 'timer.json'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8329'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    # Comma-separated list of frontend origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:8329,http://127.0.0.1:8329',
        ).split(',') if o.strip()
    ]
