"""Custom logging handlers."""

import logging
import traceback

from golfmatch.config.error_aggregator import aggregate_error

class AggregatingErrorHandler(logging.Handler):
    """Logging handler that feeds ERROR and CRITICAL records to the error aggregator."""

    def __init__(self) -> None:
        super().__init__(level=logging.ERROR)

    @staticmethod
    def service_name(logger_name: str) -> str:
        """Derive the service name from a ``golfmatch.<layer>.<module>`` logger name."""
        parts = logger_name.split('.')
        if len(parts) > 2 and parts[0] == 'golfmatch':
            return parts[2]
        return parts[-1] if parts else 'unknown'

    def emit(self, record: logging.LogRecord) -> None:
        """Process log record.

        Args:
            record: Log record to process
        """
        # The aggregator logs its own reports; re-aggregating them would loop
        if record.name == 'golfmatch.error_aggregator':
            return
        try:
            stack_trace: str | None = None
            if record.exc_info:
                stack_trace = ''.join(traceback.format_exception(*record.exc_info))
            aggregate_error(record.getMessage(), self.service_name(record.name), stack_trace)
        except Exception:
            self.handleError(record)
