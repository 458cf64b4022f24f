"""
Rotation Map - Crypto Rotation Signal Engine

Polls a public market-data API for a fixed coin universe, derives threshold
based sentiment, trend and rotation signals per coin, ranks coins and sectors,
and publishes one consistent dashboard snapshot per refresh.
"""

__version__ = "0.1.0"
__author__ = "Rotation Map Team"
