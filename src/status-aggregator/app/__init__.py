"""CloudPulse Status Aggregator service."""
