from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)-21s %(levelname)-8s %(name)-28s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MultiLineFormatter(logging.Formatter):
    """Repeat the record prefix on every line of a multi-line message (tracebacks excluded)."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        text = record.getMessage()
        if "\n" not in text:
            return message

        lines = []
        for line in text.splitlines():
            line_record = logging.LogRecord(
                record.name,
                record.levelno,
                record.pathname,
                record.lineno,
                line,
                None,
                None,
                func=record.funcName,
            )
            lines.append(super().format(line_record))
        if record.exc_text:
            lines.append(record.exc_text)
        return "\n".join(lines)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Install a single stream handler on the `hexoed` logger tree."""
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("hexoed")
    root.setLevel(level)
    if not any(isinstance(h.formatter, MultiLineFormatter) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(MultiLineFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.propagate = False
    return root
