"""
Persistence module.

Stores the user's visible-coin preference between sessions.
"""
