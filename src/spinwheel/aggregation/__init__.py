"""Aggregation module for spin analytics.

- Reads spin history and the live entry pool, produces MetricsSnapshot
- Nothing is persisted; every snapshot is computed from a full scan
"""
