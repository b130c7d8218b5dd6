from flask import jsonify, request


def request_fields():
    """Form fields, or the JSON body when the client sent JSON."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def missing_fields(fields, names):
    return [name for name in names if not str(fields.get(name) or "").strip()]


def success(message, status=200, **extra):
    body = {"success": True, "message": message}
    body.update(extra)
    return jsonify(body), status


def failure(message, status):
    return jsonify({"success": False, "message": message}), status
