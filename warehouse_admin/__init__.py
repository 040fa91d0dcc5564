from flask import Flask, g
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from warehouse_admin.utils.logger import get_logger

# Initialize extensions
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "500 per hour"],
    storage_uri="memory://"  # Use Redis in production for multi-process deployments
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(test_config=None):
    from pathlib import Path
    from warehouse_admin.buisness.session_guard import RoutePolicy

    base_dir = Path(__file__).parent

    # Templates and static files live with the presentation layer
    template_folder = str(base_dir / 'presentation' / 'templates')
    static_folder = str(base_dir / 'presentation' / 'static')

    app = Flask(__name__,
                template_folder=template_folder,
                static_folder=static_folder)

    logger = get_logger("warehouse_admin")
    logger.info("Initializing Flask application")

    # Configuration
    # SECURITY: Require SECRET_KEY in environment - no fallback
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # External services
    app.config['BACKEND_URL'] = os.environ.get('BACKEND_URL', 'http://localhost:7010/api')
    app.config['BACKEND_TIMEOUT'] = float(os.environ.get('BACKEND_TIMEOUT', '10'))
    app.config['SESSION_REVALIDATE_SECONDS'] = int(os.environ.get('SESSION_REVALIDATE_SECONDS', '300'))
    app.config['ROUTE_POLICY'] = RoutePolicy(
        landing_path=os.environ.get('LANDING_PATH', '/dashboard/imports'),
    )

    # HTTPS/TLS Configuration
    # Default to True (secure) for production - only disable for development
    app.config['ENABLE_HTTPS'] = _env_flag('ENABLE_HTTPS', 'True')
    app.config['FORCE_HTTPS_REDIRECT'] = _env_flag('FORCE_HTTPS_REDIRECT', 'True')

    # Session cookie security configuration
    app.config['SESSION_COOKIE_SECURE'] = _env_flag('SESSION_COOKIE_SECURE', 'True')
    app.config['SESSION_COOKIE_HTTPONLY'] = True  # Prevent JavaScript access to session cookie
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['PERMANENT_SESSION_LIFETIME'] = int(os.environ.get('PERMANENT_SESSION_LIFETIME', '3600'))

    # Login throttling
    app.config['LOGIN_RATE_LIMIT'] = os.environ.get('LOGIN_RATE_LIMIT', '10 per minute')
    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')

    if test_config:
        app.config.update(test_config)

    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    # Log security configuration status
    if app.config['ENABLE_HTTPS']:
        logger.info("HTTPS enforcement enabled")
        if app.config['FORCE_HTTPS_REDIRECT']:
            logger.info("Automatic HTTP to HTTPS redirect enabled")
    else:
        logger.warning("⚠️  HTTPS enforcement DISABLED - Acceptable for development only!")

    logger.debug(f"Backend configured: {app.config['BACKEND_URL']}")

    # Initialize extensions with app
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Vui lòng đăng nhập để tiếp tục.'
    login_manager.login_message_category = 'info'

    logger.debug("Extensions initialized")

    # Template filters for amounts and quantities
    from warehouse_admin.utils.formatters import TEMPLATE_FILTERS

    for name, formatter in TEMPLATE_FILTERS.items():
        app.add_template_filter(formatter, name)

    @app.template_global()
    def format_cell(value, formatter=None):
        """Table cell text: run the column's formatter, blank for missing values"""
        if formatter:
            return TEMPLATE_FILTERS[formatter](value)
        return "" if value is None else value

    # Add HTTPS redirect before request processing
    @app.before_request
    def enforce_https():
        """Redirect HTTP requests to HTTPS if HTTPS enforcement is enabled"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            from flask import request, redirect

            if not request.is_secure and not request.headers.get('X-Forwarded-Proto') == 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)

    # Register blueprints
    from warehouse_admin.auth import auth
    from warehouse_admin.presentation.routes import init_app as init_routes

    app.register_blueprint(auth)
    init_routes(app)

    @login_manager.user_loader
    def load_user(user_id):
        """Identity comes from the request's session store, never from local storage"""
        store = g.get('session_store')
        identity = store.session.identity if store is not None else None
        if identity is not None and identity.get_id() == user_id:
            return identity
        return None

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "font-src 'self' data:;"
        )
        # Ask the browser for viewport width on later requests
        response.headers['Accept-CH'] = 'Sec-CH-Viewport-Width, Viewport-Width'

        if app.config.get('ENABLE_HTTPS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    logger.info("Flask application initialization complete")

    return app
