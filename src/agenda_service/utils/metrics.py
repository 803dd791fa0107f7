"""Prometheus metrics for observability."""

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, Info

from agenda_service import __version__


class Metrics:
    """Prometheus metrics for the agenda service."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize all metrics.

        Args:
            registry: Registry the collectors are registered with
        """
        self.info = Info(
            "agenda_service",
            "Agenda service information",
            registry=registry,
        )
        self.info.info({"version": __version__})

        # Backend round-trips
        self.backend_requests_total = Counter(
            "agenda_backend_requests_total",
            "Total number of backend requests",
            ["resource", "operation", "status"],
            registry=registry,
        )

        self.backend_request_duration_seconds = Histogram(
            "agenda_backend_request_duration_seconds",
            "Duration of backend requests in seconds",
            ["resource", "operation"],
            buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        # Controller mutations
        self.controller_operations_total = Counter(
            "agenda_controller_operations_total",
            "Total number of controller operations",
            ["operation", "entity", "status"],
            registry=registry,
        )

        # Search
        self.search_requests_total = Counter(
            "agenda_search_requests_total",
            "Total number of search requests",
            ["trigger"],
            registry=registry,
        )

        self.search_results_count = Histogram(
            "agenda_search_results_count",
            "Number of results returned by search",
            buckets=[0, 1, 5, 10, 25, 50, 100],
            registry=registry,
        )

        # Toasts
        self.toasts_total = Counter(
            "agenda_toasts_total",
            "Total number of toasts shown",
            ["kind"],
            registry=registry,
        )

    def record_backend_request(
        self,
        resource: str,
        operation: str,
        status: str,
        duration: float,
    ) -> None:
        """Record a backend request metric.

        Args:
            resource: Table name or "auth"
            operation: Operation name (select, insert, update, delete, sign_in, ...)
            status: Request status (success, error)
            duration: Request duration in seconds
        """
        self.backend_requests_total.labels(
            resource=resource,
            operation=operation,
            status=status,
        ).inc()
        self.backend_request_duration_seconds.labels(
            resource=resource,
            operation=operation,
        ).observe(duration)

    def record_operation(self, operation: str, entity: str, status: str) -> None:
        """Record a controller create/update/delete outcome."""
        self.controller_operations_total.labels(
            operation=operation,
            entity=entity,
            status=status,
        ).inc()

    def record_search(self, trigger: str, result_count: int) -> None:
        """Record a search run.

        Args:
            trigger: What started the search (live, enter, click, api)
            result_count: Number of results returned
        """
        self.search_requests_total.labels(trigger=trigger).inc()
        self.search_results_count.observe(result_count)

    def record_toast(self, kind: str) -> None:
        """Record a toast being shown."""
        self.toasts_total.labels(kind=kind).inc()


_metrics_instance: Metrics | None = None


def get_metrics() -> Metrics:
    """Get the process-wide metrics instance."""
    global _metrics_instance
    if _metrics_instance is None:
        _metrics_instance = Metrics()
    return _metrics_instance
