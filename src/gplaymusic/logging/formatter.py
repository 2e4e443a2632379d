"""JSON rendering of the client's log records.

Records from the interceptor chain and the service layer carry the request
they describe as ``method``/``path``/``status_code`` attributes; bootstrap
transitions carry ``state`` and ``previous_state``. The formatter lifts
whichever of those are present into top-level keys, so a failed call reads::

    {"ts": "2024-05-01T12:00:00.123+00:00", "level": "WARNING",
     "service": "gplaymusic", "logger": "gplaymusic.interceptors",
     "msg": "GET /sj/v2.5/query returned HTTP 500: boom",
     "method": "GET", "path": "/sj/v2.5/query", "status_code": 500}
"""

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

REQUEST_FIELDS = ("method", "path", "status_code")
BOOTSTRAP_FIELDS = ("state", "previous_state")


class JSONLogFormatter(logging.Formatter):
    def __init__(
        self,
        service: str = "gplaymusic",
        *,
        fields: Iterable[str] = REQUEST_FIELDS + BOOTSTRAP_FIELDS,
    ) -> None:
        super().__init__()
        self._service = service
        self._fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        entry: dict[str, object] = {
            "ts": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in self._fields:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["error"] = record.exc_info[0].__name__
            entry["traceback"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)
