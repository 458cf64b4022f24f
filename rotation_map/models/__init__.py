"""
Derived signal models module.

Immutable label enums and per-refresh result objects produced by the
indicator, scoring, ranking and sector aggregation stages.
"""
