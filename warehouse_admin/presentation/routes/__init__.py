"""
Routes package for the warehouse admin dashboard
"""

from warehouse_admin.utils.logger import get_logger

logger = get_logger("warehouse_admin.routes")


def init_app(app):
    """Install the request gate and register the page blueprints"""
    from .gate import close_session_gate, inject_layout_state, open_session_gate
    from .main import main
    from .dashboard import bp as dashboard_bp

    logger.debug("Initializing route blueprints")

    app.before_request(open_session_gate)
    app.teardown_request(close_session_gate)
    app.context_processor(inject_layout_state)

    app.register_blueprint(main)
    app.register_blueprint(dashboard_bp, url_prefix='/dashboard')

    logger.info("Registered main and dashboard blueprints")
