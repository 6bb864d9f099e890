import logging
import json
from typing import Dict, Any

class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the log record.
    """
    def format(self, record: logging.LogRecord) -> str:
        logobj: Dict[str, Any] = {}
        logobj["level"] = record.levelname
        logobj["time"] = self.formatTime(record, self.datefmt)
        logobj["logger"] = record.name
        logobj["message"] = record.getMessage()

        if record.exc_info:
            logobj["exception"] = self.formatException(record.exc_info)

        return json.dumps(logobj)
