import logging
import re
import sys
import uuid
from contextvars import ContextVar
from pythonjsonlogger import jsonlogger

request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")

# client-supplied ids are echoed back in a response header
REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "google.auth")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get()
        return True


def configure_logging(level: str = "INFO", service: str = "resume_ia") -> None:
    """Send JSON records to stdout, tagged with the current request id."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root = logging.getLogger()
    root.setLevel(numeric_level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
            rename_fields={"levelname": "level", "asctime": "ts"},
            static_fields={"service": service},
        )
    )
    handler.addFilter(RequestIdFilter())
    root.handlers = [handler]
    # request URLs carry API keys as query params
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def ensure_request_id(value: str | None) -> str:
    if value and REQUEST_ID_RE.match(value):
        return value
    return uuid.uuid4().hex
