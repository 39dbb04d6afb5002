from flask import Blueprint, jsonify, send_from_directory, current_app

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return send_from_directory(current_app.static_folder, 'index.html')

@main.route('/healthz')
def healthz():
    return jsonify({'status': 'ok'})
