"""
Event log and upload API endpoints.

Provides endpoints for:
- POST /api/logs - Append a dashboard event
- GET /api/logs - Newest events first (max 200)
- POST /api/upload - Store an uploaded file
- GET /uploads/<filename> - Serve a stored file
"""

import logging
import os
import time

from flask import Blueprint, current_app, jsonify, request, send_from_directory
from werkzeug.utils import secure_filename

from skyguard.models.event_log import append_event, generate_id, list_recent_events

logger = logging.getLogger(__name__)

events_bp = Blueprint('events', __name__)


@events_bp.route('/api/logs', methods=['POST'])
def create_event():
    """
    Append an event.

    Body: {"type": str, "payload": object, "meta": object}, all optional.
    """
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        body = {}

    entry = append_event(
        event_type=body.get('type'),
        payload=body.get('payload'),
        meta=body.get('meta'),
    )
    logger.debug(f'Logged event {entry.id} ({entry.type})')

    return jsonify({'ok': True, 'id': entry.id})


@events_bp.route('/api/logs', methods=['GET'])
def list_events():
    items = [entry.to_dict() for entry in list_recent_events()]
    return jsonify({'ok': True, 'items': items})


def _upload_dir() -> str:
    upload_dir = os.path.abspath(current_app.config['UPLOAD_DIR'])
    os.makedirs(upload_dir, exist_ok=True)
    return upload_dir


def build_upload_name(original_name: str) -> str:
    """<epoch-ms>_<10-char id><extension, at most 8 chars>"""
    ext = os.path.splitext(secure_filename(original_name or ''))[1][:8]
    return f'{int(time.time() * 1000)}_{generate_id(10)}{ext}'


@events_bp.route('/api/upload', methods=['POST'])
def upload_file():
    """Store the multipart field `file` and return its public URL."""
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return jsonify({'ok': False, 'error': 'No file provided'}), 400

    filename = build_upload_name(upload.filename)
    upload.save(os.path.join(_upload_dir(), filename))
    logger.info(f'Stored upload {filename}')

    return jsonify({'ok': True, 'url': f'/uploads/{filename}', 'filename': filename})


@events_bp.route('/uploads/<path:filename>', methods=['GET'])
def get_upload(filename: str):
    return send_from_directory(_upload_dir(), filename)
