from prometheus_client import Counter, Gauge, Histogram

poll_duration_seconds = Histogram('poll_duration_seconds', 'Duration of a sampling tick', ['metric'])
poll_errors_total = Counter('poll_errors_total', 'Number of failed samples', ['metric', 'channel'])
last_poll_timestamp = Gauge('last_poll_timestamp', 'Unix timestamp of last successful sample', ['metric', 'channel'])

raised_events_total = Counter('raised_events_total', 'Number of raised events emitted', ['metric', 'channel'])
tracked_count = Gauge('tracked_count', 'Best value seen so far', ['metric', 'channel'])
pollers_active = Gauge('pollers_active', 'Number of currently active pollers', ['metric'])
