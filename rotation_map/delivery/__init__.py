"""
Dashboard delivery module.

Renders dashboard snapshots for display. Renderers consume derived values
and make no decisions of their own.
"""
