"""API module for QAME.

Per the api layer boundary:
- Validates inputs, reads/writes DB
- Returns payloads for the form and dashboard
- Forbidden: aggregation logic beyond calling the aggregator
"""
