from .responses import ok, error, validation_error_response
from .validation import validate_schema
from .db import transactional

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'validate_schema',
    'transactional',
]
