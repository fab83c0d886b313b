# storefront/utils/logging.py
import logging
import re
import sys

from storefront.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

#maskowanie sekretow zanim trafia do logow
_PATTERNS = [
    (re.compile(r"(token[\"']?\s*[:=]\s*[\"']?)([A-Za-z0-9_\-.:]{12,})", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"(password[\"']?\s*[:=]\s*[\"']?)([^\s\"',]+)", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"(Bearer\s+)([A-Za-z0-9_\-.]+)", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"\b(sk|tok|rk)_(live|test)_[A-Za-z0-9]+\b"), "[REDACTED]"),
]


class SecretMaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern, replacement in _PATTERNS:
            message = pattern.sub(replacement, message)
        record.msg = message
        record.args = None
        return True


_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(SecretMaskingFilter())

    root = logging.getLogger("storefront")
    root.setLevel(LOG_LEVEL.upper())
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    return logging.getLogger(name)
