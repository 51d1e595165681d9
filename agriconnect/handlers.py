"""Helpers shared by the API blueprints."""
import logging
from functools import wraps

from flask import request
from pydantic import ValidationError

from agriconnect import db
from agriconnect.errors import AgriConnectError, ValidationFailed

logger = logging.getLogger(__name__)


def api_errors(message, status_code=500):
    """Decorator turning handler failures into JSON errors.

    Schema errors become a 400 with ``message``; application errors keep
    their own message and status; anything else is logged, the session is
    rolled back and ``status_code`` is returned with ``message``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationError as exc:
                errors = [
                    {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
                    for err in exc.errors()
                ]
                raise ValidationFailed(message, errors=errors) from exc
            except AgriConnectError:
                raise
            except Exception as exc:
                logger.exception('%s: %s', message, exc)
                db.session.rollback()
                raise AgriConnectError(message, status_code) from exc
        return decorated_function
    return decorator


def parse_payload(schema):
    """Validate the JSON request body against a payload schema."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    return schema.model_validate(data)
