"""Bearer access key checks.

The lookup API is protected by a single shared secret. A missing
configured key never disables the check: every request is rejected.
"""

import hmac
from typing import Optional

BEARER_PREFIX = "bearer "


def get_access_key(authorization: Optional[str]) -> str:
    """Extract the credential from an Authorization header value.

    Examples:
        'Bearer s3cret' -> 's3cret'
        'bearer   s3cret  ' -> 's3cret'
        'Basic dXNlcg==' -> ''

    Args:
        authorization: Raw header value (may be None)

    Returns:
        str: Trimmed credential, or '' when the scheme is not Bearer
    """
    value = authorization or ""
    if value.lower().startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):].strip()
    return ""


def is_authorized(provided: str, configured: Optional[str]) -> bool:
    """Compare a presented credential with the configured access key."""
    if not configured:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), configured.encode("utf-8"))
