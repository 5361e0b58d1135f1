# Overview: Request decorators for API routes.

from functools import wraps
from flask import current_app, g


def with_merchant(f):
    """
    Establish the merchant context for a request.

    There is no authentication: every request acts as the configured
    DEFAULT_USER_ID, exposed to routes as g.user_id.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.user_id = current_app.config["DEFAULT_USER_ID"]
        return f(*args, **kwargs)

    return decorated_function
