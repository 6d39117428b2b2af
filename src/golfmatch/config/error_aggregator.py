"""Error aggregation and reporting utilities."""

import logging
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from types import TracebackType

from golfmatch.config.logging_config import ErrorAggregationConfig

@dataclass
class ErrorGroup:
    """Group of identical errors raised by one or more services."""
    message: str
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: set[str] = field(default_factory=set)
    stack_traces: set[str] = field(default_factory=set)

    def update(self, service: str, stack_trace: str | None = None) -> None:
        """Record another occurrence."""
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if stack_trace:
            self.stack_traces.add(stack_trace)

def _format_trace(trace: str | TracebackType | None) -> str | None:
    if trace is None:
        return None
    if isinstance(trace, TracebackType):
        return ''.join(traceback.format_tb(trace))
    return str(trace)

class ErrorAggregator:
    """Aggregates errors so repeated failures are reported once per window."""

    def __init__(self, config: ErrorAggregationConfig):
        """Initialize error aggregator.

        Args:
            config: Error aggregation configuration
        """
        self._errors: dict[str, ErrorGroup] = {}
        self._lock = threading.Lock()
        self._config = config
        self._last_report = datetime.now()
        self.logger = logging.getLogger('golfmatch.error_aggregator')

        self._stop_flag = threading.Event()
        self._report_thread: threading.Thread | None = None
        if config.enabled and config.report_interval > 0:
            self._report_thread = threading.Thread(
                target=self._periodic_report,
                name='error-aggregator',
                daemon=True
            )
            self._report_thread.start()

    @property
    def pending(self) -> dict[str, ErrorGroup]:
        """Snapshot of error groups not yet reported."""
        with self._lock:
            return dict(self._errors)

    def add_error(
        self,
        message: str,
        service: str,
        stack_trace: str | TracebackType | None = None
    ) -> None:
        """Add error occurrence to aggregator.

        Args:
            message: Error message
            service: Service where error occurred
            stack_trace: Optional formatted stack trace or traceback object
        """
        if not self._config.enabled:
            return

        with self._lock:
            group = self._errors.setdefault(message, ErrorGroup(message=message))
            group.update(service, _format_trace(stack_trace))

            age = (datetime.now() - group.first_seen).total_seconds()
            if group.count >= self._config.error_threshold or age >= self._config.time_threshold:
                self._report_error_group(group)
                del self._errors[message]

    def _report_error_group(self, group: ErrorGroup) -> None:
        self.logger.error(
            f"{group.message} (x{group.count} in {', '.join(sorted(group.services))})",
            extra={"extra_fields": {"error_count": group.count}}
        )
        for trace in group.stack_traces:
            if trace.strip():
                self.logger.debug("Stack trace:\n%s", trace)

    def flush(self) -> None:
        """Report and clear every pending error group."""
        with self._lock:
            for group in self._errors.values():
                self._report_error_group(group)
            self._errors.clear()
            self._last_report = datetime.now()

    def _periodic_report(self) -> None:
        while not self._stop_flag.wait(1):
            if (datetime.now() - self._last_report).total_seconds() >= self._config.report_interval:
                self.flush()

    def shutdown(self) -> None:
        """Stop the reporting thread and report remaining errors."""
        if not self._config.enabled:
            return

        self._stop_flag.set()
        if self._report_thread is not None:
            self._report_thread.join()
        self.flush()

_error_aggregator: ErrorAggregator | None = None

def init_error_aggregator(config: ErrorAggregationConfig) -> ErrorAggregator:
    """Initialize (or replace) the global error aggregator.

    Args:
        config: Error aggregation configuration

    Returns:
        The new aggregator
    """
    global _error_aggregator
    if _error_aggregator is not None:
        _error_aggregator.shutdown()
    _error_aggregator = ErrorAggregator(config)
    return _error_aggregator

def get_error_aggregator() -> ErrorAggregator:
    """Get global error aggregator instance.

    Raises:
        RuntimeError: If error aggregator not initialized
    """
    if _error_aggregator is None:
        raise RuntimeError("Error aggregator not initialized. Call init_error_aggregator first.")
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    stack_trace: str | TracebackType | None = None
) -> None:
    """Add error to the global aggregator, if one is running."""
    if _error_aggregator is None:
        return
    _error_aggregator.add_error(message, service, stack_trace)
