"""Base service logging mixin.

Every application service logs through a structlog logger bound with the
service class name and component, plus per-operation context and the
current correlation id.

Usage:
    class ConsensusAwareService(LoggingMixin):
        def __init__(self, store: ValidationRequestRepositoryProtocol) -> None:
            self._store = store
            self._init_logger()

        async def finalize(self, request_id: str) -> None:
            log = self._log_operation("finalize", request_id=request_id)
            log.info("finalization_started")
"""

import structlog

from src.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "validation") -> None:
        """Bind the service logger.

        Call from ``__init__`` after dependencies are set.

        Args:
            component: Component name used to group log events.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Return a logger scoped to one operation.

        Args:
            operation: Name of the operation being performed.
            **context: Extra key/values bound to every event.

        Returns:
            BoundLogger carrying operation and correlation_id.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
