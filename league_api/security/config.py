"""Security configuration and middleware."""

from flask import request

from league_api.extensions import cors


def configure_security_headers(app):
    """Configure security headers."""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        # Prevent MIME type sniffing
        response.headers['X-Content-Type-Options'] = 'nosniff'

        # JSON only; nothing here should ever be framed or rendered as a page
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"
        response.headers['Referrer-Policy'] = 'no-referrer'

        # Token-bearing responses must not be cached by intermediaries
        if request.path.startswith('/auth/'):
            response.headers['Cache-Control'] = 'no-store'

        # HSTS for HTTPS (only add if using HTTPS)
        if request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    return app


def configure_cors(app):
    """Allow the configured browser origins to call the API."""
    # Bearer tokens travel in a header, so cookies are never shared cross-origin
    cors.init_app(
        app,
        origins=app.config.get('CORS_ORIGINS', []),
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Authorization', 'Content-Type'],
        max_age=app.config.get('CORS_MAX_AGE', 600),
        supports_credentials=False,
    )
    return app


def auth_rate_limit():
    """Rate limit for authentication endpoints."""
    return "5 per minute"


__all__ = [
    'configure_security_headers',
    'configure_cors',
    'auth_rate_limit',
]
