"""
Security utilities - never log or return secrets.
"""

import re
from typing import Any, Dict


SENSITIVE_KEY_MARKERS = (
    'token',
    'secret',
    'password',
    'api_key',
)


def _is_sensitive_key(key: str) -> bool:
    key_lower = str(key).lower()
    return any(marker in key_lower for marker in SENSITIVE_KEY_MARKERS)


def sanitize_dict_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove sensitive fields from dict for logging.

    Args:
        data: Dictionary that may contain secrets.

    Returns:
        Sanitized dictionary with secrets replaced.
    """
    result = {}
    for key, value in data.items():
        if _is_sensitive_key(key):
            result[key] = '***REDACTED***' if value else value
        elif isinstance(value, dict):
            result[key] = sanitize_dict_for_logging(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_dict_for_logging(item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def sanitize_string_for_logging(text: str) -> str:
    """
    Remove Shopify access tokens from a string (error bodies, URLs).

    Args:
        text: String that may contain secrets.

    Returns:
        Sanitized string.
    """
    if not text:
        return text

    patterns = [
        r'shp(at|ca|pa|ss)_[a-fA-F0-9]{16,}',
        r'(?i)(x-shopify-access-token["\']?\s*[:=]\s*["\']?)[^\s"\',}]+',
    ]

    result = re.sub(patterns[0], '***REDACTED***', text)
    result = re.sub(patterns[1], r'\1***REDACTED***', result)
    return result
