"""
Utilities Package

Helper functions used across the application:
- http_errors.py: logging + 500 translation for store failures
"""

from crud_app.utils.http_errors import store_failure

__all__ = ["store_failure"]
