"""Prometheus metrics for resource duplication.

Metrics include:

- Registrations of the duplication feature by resource and strategy
- Duplication requests by resource, strategy and outcome

Examples:
    Recording a saved duplicate::

        from admin_duplicatable.observability.metrics import record_duplication

        record_duplication(resource="posts", strategy="save", outcome="succeeded")
"""

from prometheus_client import Counter

# Labels: resource, strategy
registrations_total = Counter(
    "duplicatable_registrations_total",
    "Total number of admin resources configured for duplication",
    ["resource", "strategy"],
)

# Labels: resource, strategy, outcome (prefilled, skipped, succeeded, failed)
duplications_total = Counter(
    "duplicatable_duplications_total",
    "Total number of duplication requests handled",
    ["resource", "strategy", "outcome"],
)


def record_registration(resource: str, strategy: str) -> None:
    """Record that a resource was configured for duplication.

    Examples:
        >>> record_registration("posts", "form")
    """
    registrations_total.labels(resource=resource, strategy=strategy).inc()


def record_duplication(resource: str, strategy: str, outcome: str) -> None:
    """Record a handled duplication request.

    Args:
        resource: Resource name, e.g. ``posts``
        strategy: ``form`` or ``save``
        outcome: ``prefilled``, ``skipped``, ``succeeded`` or ``failed``

    Examples:
        >>> record_duplication("posts", "save", "failed")
    """
    duplications_total.labels(resource=resource, strategy=strategy, outcome=outcome).inc()
