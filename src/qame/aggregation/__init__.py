"""Aggregation module for evaluation results.

- Reduces stored submissions into an AggregateReport
- Derives display labels from mean ratings
- Forbidden: writes to the store
"""
