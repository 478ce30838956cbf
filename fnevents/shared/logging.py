import logging

from fnevents.shared.config import settings


class TraceIdFilter(logging.Filter):
    """Ensure trace_id always exists on LogRecord, so the format string never fails."""

    def filter(self, record):
        if not hasattr(record, "trace_id"):
            record.trace_id = "-"
        return True


class TraceAdapter(logging.LoggerAdapter):
    """Stamps every record with the trace id of the request being converted."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("trace_id", self.extra.get("trace_id", "-"))
        return msg, kwargs


def setup_logging():
    level = settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s trace=%(trace_id)s %(name)s - %(message)s"
    )
    # trace_id is set by the adapter; plain loggers fall back to "-"
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, TraceIdFilter) for f in handler.filters):
            handler.addFilter(TraceIdFilter())
