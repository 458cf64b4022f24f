"""
Data ingestion and normalization module.

Turns raw market-data provider payloads into per-coin market snapshots
where every missing or malformed number is an explicit unknown.
"""
