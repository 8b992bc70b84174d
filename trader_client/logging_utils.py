"""
Trader Client - Secure Logging Utilities.

============================================================
PURPOSE
============================================================
Credential masking for log output.

SECURITY REQUIREMENTS:
1. NEVER log raw API keys or secrets
2. Mask sensitive parameters before they reach a log line

============================================================
"""

import re
from typing import Any, Dict


# Parameter names that should be masked
SENSITIVE_PARAMS = {
    "key",
    "apikey",
    "api_key",
    "secret",
    "api_secret",
    "secretkey",
    "secret_key",
    "password",
    "passphrase",
    "signature",
    "sign",
    "token",
}

# Regex patterns for sensitive data
SENSITIVE_PATTERNS = [
    (re.compile(r'[A-Za-z0-9+/=-]{32,}'), "***KEY***"),  # API keys (32+ chars)
]


def mask_value(value: str, show_chars: int = 4) -> str:
    """
    Mask a sensitive value, showing only first few chars.
    
    Args:
        value: Value to mask
        show_chars: Number of chars to show at start
    
    Returns:
        Masked value
    """
    if not value or len(value) <= show_chars:
        return "***"
    return f"{value[:show_chars]}...***"


def mask_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mask sensitive parameters.
    
    Args:
        params: Parameters (e.g. a trader config mapping)
    
    Returns:
        Parameters with sensitive values masked
    """
    if not params:
        return {}
    
    masked = {}
    for key, value in params.items():
        if key.lower() in SENSITIVE_PARAMS:
            masked[key] = mask_value(str(value)) if value else value
        elif isinstance(value, dict):
            masked[key] = mask_params(value)
        elif isinstance(value, str):
            masked_value = value
            for pattern, replacement in SENSITIVE_PATTERNS:
                masked_value = pattern.sub(replacement, masked_value)
            masked[key] = masked_value
        else:
            masked[key] = value
    return masked
