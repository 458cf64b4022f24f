"""
Configuration module.

Threshold tables, provider and refresh settings, and the coin universe,
loaded from defaults with optional YAML overrides.
"""
