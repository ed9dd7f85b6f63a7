"""
Logging setup for the Streamlit app.

Streamlit re-executes the entry script on every interaction, so setup must be
idempotent: the handler is attached once and later calls only adjust the level.
"""
import logging
import re
import sys
from typing import Optional

LOGGER_NAME = "lendbridge"
_HANDLER_NAME = "lendbridge-stream"


class SensitiveDataFilter(logging.Filter):
    """Mask card data and credentials in log messages"""

    SENSITIVE_PATTERNS = [
        # PANs, optionally grouped with spaces or dashes
        (re.compile(r"\b(?:\d[ -]?){12,18}\d\b"), "****"),
        (re.compile(r'cvv["\']?\s*[:=]\s*["\']?\d{3,4}', re.IGNORECASE), "cvv=***"),
        (re.compile(r'password["\']?\s*[:=]\s*["\']?[^"\'\s,}]+', re.IGNORECASE), "password=***"),
        (re.compile(r"Bearer\s+[^\s\"']+"), "Bearer ***"),
        (re.compile(r'(access|refresh)_token["\']?\s*[:=]\s*["\']?[^"\'\s,}]+', re.IGNORECASE), r"\1_token=***"),
    ]

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.enabled:
            return True

        # Render args first so values passed as %s parameters are masked too
        if record.args:
            try:
                record.msg = record.getMessage()
                record.args = None
            except (TypeError, ValueError):
                pass
        if isinstance(record.msg, str):
            record.msg = self.mask(record.msg)
        return True


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        handler.addFilter(SensitiveDataFilter())
        root.addHandler(handler)
        # Streamlit installs its own root handlers
        root.propagate = False

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the app logger, e.g. get_logger(__name__) -> lendbridge.backend.cards"""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
