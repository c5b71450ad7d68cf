"""Secure logging utilities with credential scrubbing.

gcloud stderr is logged verbatim when an inventory query fails, and it can
carry access tokens or key material. Every handler installed here passes
records through :class:`CredentialScrubbingFilter` unless explicitly disabled.
"""

import logging
import re
from typing import ClassVar

from textual.logging import TextualHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CredentialScrubbingFilter(logging.Filter):
    """Logging filter that redacts credentials from log messages."""

    PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        # JSON-style secrets: "token": "value"
        (
            re.compile(
                r'"(token|access_token|refresh_token|id_token|private_key|'
                r'client_secret|api_key|password|secret)"\s*:\s*"[^"]*"'
            ),
            r'"\1": "[REDACTED]"',
        ),
        # HTTP authorization headers
        (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE), "[REDACTED]"),
        # key=value parameters
        (
            re.compile(r"\b(token|access_token|api_key|password|secret)=([^\s,&\"']+)"),
            r"\1=[REDACTED]",
        ),
        # Long base64 blobs (service account keys, encoded tokens)
        (re.compile(r"[A-Za-z0-9+/]{40,}={0,2}"), "[REDACTED_BASE64]"),
    ]

    @classmethod
    def scrub(cls, text: str) -> str:
        """Redact credentials from a string.

        Args:
            text: Text that may contain credentials

        Returns:
            Text with credentials replaced by redaction markers
        """
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Scrub the record in place and let it through.

        Args:
            record: Log record to scrub

        Returns:
            Always True
        """
        if isinstance(record.msg, str):
            record.msg = self.scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                self.scrub(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    enable_credential_scrubbing: bool = True,
) -> None:
    """Configure root logging for the application.

    Records go to ``log_file`` when one is given. Otherwise they are routed
    through Textual's handler, which writes to the devtools console while the
    app is running and to stderr when it is not.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a log file
        enable_credential_scrubbing: Attach the credential scrubbing filter
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = TextualHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if enable_credential_scrubbing:
        handler.addFilter(CredentialScrubbingFilter())

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
