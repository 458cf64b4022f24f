"""
Market-data provider module.

HTTP collaborators that fetch raw market payloads for the coin universe.
"""
