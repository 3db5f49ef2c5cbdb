"""Observability: structured logging and metrics.

Logging goes through structlog, metrics through prometheus_client.
"""
