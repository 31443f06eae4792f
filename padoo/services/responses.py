"""
JSON envelope helpers

Every API response is ``{"success": bool, ...}``.
"""

from flask import jsonify


def ok(status=200, **payload):
    body = {'success': True}
    body.update(payload)
    return jsonify(body), status


def fail(message, status=400, **payload):
    body = {'success': False, 'message': message}
    body.update(payload)
    return jsonify(body), status
