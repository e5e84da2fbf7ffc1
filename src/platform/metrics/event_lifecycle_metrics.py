from prometheus_client import Counter, Histogram


class EventLifecycleMetrics:
    """Event status transition and fan-out metrics."""

    def __init__(self) -> None:
        self.status_transitions = Counter(
            'event_status_transitions_total',
            'Event status transition attempts',
            ['from_status', 'to_status', 'result'],  # result: success/<error class name>
        )

        self.fan_out_publishes = Counter(
            'event_fan_out_publishes_total',
            'Published-event fan-out messages',
            ['result'],
        )

        self.transition_duration = Histogram(
            'event_status_transition_duration_seconds',
            'Time spent in one transition attempt',
            ['to_status'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

    def record_transition(self, *, from_status: str, to_status: str, result: str) -> None:
        self.status_transitions.labels(
            from_status=from_status, to_status=to_status, result=result
        ).inc()

    def record_fan_out(self, *, result: str) -> None:
        self.fan_out_publishes.labels(result=result).inc()


# Module-level singleton; prometheus_client registers collectors globally
metrics = EventLifecycleMetrics()
