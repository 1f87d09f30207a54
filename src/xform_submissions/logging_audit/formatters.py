"""Custom log formatters for the XForm submissions utility.

This module provides a formatter that keeps encryption material out of logs.
"""

import logging
import re
from typing import List, Tuple


class SecretRedactingFormatter(logging.Formatter):
    """Formatter that redacts encryption keys and signatures from log messages.

    Encrypted submissions carry a base64 encoded symmetric key and a signature.
    Neither should end up in log files, which are often shared when reporting
    problems.

    Attributes:
        redact_secrets: Whether to enable redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = SecretRedactingFormatter(redact_secrets=True)
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_secrets: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_secrets = redact_secrets

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # <base64EncryptedKey>...</base64EncryptedKey> and the signature element
            (
                re.compile(
                    r"<(base64EncryptedKey|base64EncryptedElementSignature)>[^<]*</\1>"
                ),
                r"<\1>[REDACTED]</\1>",
            ),
            # base64_encrypted_key=..., encrypted_signature: ...
            (
                re.compile(
                    r"(base64_encrypted_key|encrypted_signature)(['\"]?\s*[=:]\s*['\"]?)[A-Za-z0-9+/=]+"
                ),
                r"\1\2[REDACTED]",
            ),
            # Any other long base64 run
            (re.compile(r"(?<![A-Za-z0-9+/])[A-Za-z0-9+/]{64,}={0,2}"), "[BASE64-REDACTED]"),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional redaction.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with secrets redacted if enabled
        """
        original = super().format(record)

        if self.redact_secrets:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
