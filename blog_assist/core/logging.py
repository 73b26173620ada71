"""Logging setup: one readable line per record, structured extras as JSON."""

import json
import logging
import sys

from blog_assist.config import settings

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class JSONExtrasFormatter(logging.Formatter):
    """``timestamp | LEVEL | logger | [provider] message {extras}``.

    Provider integrations and agents log a ``provider`` extra; it is lifted
    into the line so upstream failures can be grepped per vendor.
    """

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        timestamp = self.formatTime(record, self.datefmt)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        provider = extras.pop("provider", None)
        message = f"[{provider}] {record.message}" if provider else record.message
        line = f"{timestamp} | {record.levelname:<8} | {record.name} | {message}"

        if extras:
            try:
                line = f"{line} {json.dumps(extras, default=str, ensure_ascii=False)}"
            except (TypeError, ValueError):
                pass

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        return line


def setup_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the ``blog_assist`` logger once."""
    resolved_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger = logging.getLogger("blog_assist")
    logger.setLevel(resolved_level)
    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved_level)
    handler.setFormatter(JSONExtrasFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
