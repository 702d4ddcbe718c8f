import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("tokenpager")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_token(token: Any) -> str | None:
    """
    Redacts a pagination cursor for logging.
    Hashes the value so consecutive pages can be correlated without
    leaking resource identifiers embedded in the token.
    """
    if token is None:
        return None
    try:
        if isinstance(token, dict):
            # Sort keys so composite cursors hash deterministically
            token = sorted(token.items())
        return hashlib.sha256(str(token).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
