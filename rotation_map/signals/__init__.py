"""
Rotation ranking and signal emission module.

Ranks coins by rotation score, aggregates sectors, and emits cross-market
rotation signal messages over the whole coin universe.
"""
