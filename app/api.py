from app.routes import (
    auth_bp,
    wholesaler_bp,
    orders_bp,
    categories_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(wholesaler_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(categories_bp)
