"""REST blueprints, one per resource."""

from flask import abort, request


def get_or_404(repo, doc_id, message):
    doc = repo.get(doc_id)
    if doc is None:
        abort(404, description=message)
    return doc


def json_object():
    """Request body as a dict. A missing body is empty; any other JSON value is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description="Request body must be a JSON object")
    return data


def register_blueprints(app):
    from .auth import bp as auth_bp
    from .menu import bp as menu_bp
    from .orders import bp as orders_bp
    from .payments import bp as payments_bp
    from .staff import bp as staff_bp
    from .tables import bp as tables_bp
    from .venues import bp as venues_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(venues_bp, url_prefix="/venues")
    app.register_blueprint(menu_bp, url_prefix="/menu")
    app.register_blueprint(orders_bp, url_prefix="/orders")
    app.register_blueprint(tables_bp, url_prefix="/tables")
    app.register_blueprint(staff_bp, url_prefix="/staff")
    app.register_blueprint(payments_bp, url_prefix="/payments")
