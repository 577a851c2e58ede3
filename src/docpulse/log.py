"""Logging configuration with Rich formatting.

setup_logging() installs a Rich handler that masks Slack, OpenAI and GitHub
tokens; get_logger() returns module-level loggers.
"""

import logging
import re
from typing import Optional
from rich.logging import RichHandler
from .config import get_settings

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "slack_bolt", "slack_sdk")

TOKEN_RE = re.compile(r"\b(xox[abpe]-|xapp-|xoxe\.xoxp-|sk-|ghp_|github_pat_)[A-Za-z0-9_\-]{6,}")

def mask_tokens(text: str) -> str:
    return TOKEN_RE.sub(lambda m: f"{m.group(1)}***", text)

class TokenMaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_tokens(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True

def setup_logging(level: Optional[str] = None):
    handler = RichHandler(rich_tracebacks=True, markup=False)
    handler.addFilter(TokenMaskingFilter())
    logging.basicConfig(
        level=level or get_settings().LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler]
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

def get_logger(name: str):
    return logging.getLogger(name)
