"""Prometheus metrics for the action pipeline."""

from prometheus_client import Counter, Histogram

ACTIONS_REGISTERED = Counter(
    "actionlog_actions_registered_total",
    "Actions registered with the action logger",
    labelnames=["action_type"],
)

EVENTS_EMITTED = Counter(
    "actionlog_events_emitted_total",
    "Audit events persisted",
    labelnames=["stage", "is_error"],
)

TRIGGERS_FIRED = Counter(
    "actionlog_triggers_fired_total",
    "Prepatch triggers whose patch was merged",
    labelnames=["schema_key"],
)

CASCADE_ROUNDS = Histogram(
    "actionlog_cascade_rounds",
    "Rounds run by one prepatch cascade",
    labelnames=["schema_key"],
    buckets=(0, 1, 2, 3, 5, 10, 20, 50),
)
