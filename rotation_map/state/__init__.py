"""
Refresh state module.

Owns the latest dashboard snapshot and the periodic refresh loop. Snapshots
are replaced wholesale; a stale or failed refresh never touches the current one.
"""
