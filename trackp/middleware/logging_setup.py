"""
Logging configuration and setup.
"""
import logging

from trackp.monitoring import get_request_id

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class RequestIDFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record):
        """Add request_id to log record if available."""
        if not getattr(record, 'request_id', None):
            record.request_id = get_request_id() or '-'
        return True


class SafeFormatter(logging.Formatter):
    """Safe formatter that handles missing request_id gracefully."""

    def format(self, record):
        """Format log record, handling missing request_id."""
        if not hasattr(record, 'request_id'):
            record.request_id = '-'
        return super().format(record)


def setup_logging(log_level: str = "INFO") -> None:
    """Setup structured logging with request ID support."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIDFilter())
    handler.setFormatter(SafeFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=[handler],
        force=True
    )
