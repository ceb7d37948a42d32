"""Prometheus metrics for itinerary planning."""

from prometheus_client import Counter, Histogram

itinerary_mutations_total = Counter(
    "itinerary_mutations_total",
    "Total itinerary mutations",
    ["operation"],
)

plan_attachments_total = Counter(
    "plan_attachments_total",
    "Total generated plans handled by the chat flow",
    ["outcome"],
)

chat_tool_calls_total = Counter(
    "chat_tool_calls_total",
    "Total tool calls dispatched from model replies",
    ["tool", "outcome"],
)

plan_validation_errors = Histogram(
    "plan_validation_errors",
    "Number of field errors per rejected plan",
    buckets=[1, 2, 5, 10, 20, 50],
)


class PrometheusPlanningMetrics:
    """Prometheus-based planning metrics implementation."""

    def inc_mutation(self, operation: str) -> None:
        """Increment itinerary mutation counter."""
        itinerary_mutations_total.labels(operation=operation).inc()

    def inc_attachment(self, outcome: str) -> None:
        """Increment plan attachment counter."""
        plan_attachments_total.labels(outcome=outcome).inc()

    def inc_tool_call(self, tool: str, outcome: str) -> None:
        """Increment tool call counter."""
        chat_tool_calls_total.labels(tool=tool, outcome=outcome).inc()

    def observe_validation_errors(self, count: int) -> None:
        """Record the size of a rejected plan's error list."""
        plan_validation_errors.observe(count)


metrics = PrometheusPlanningMetrics()
