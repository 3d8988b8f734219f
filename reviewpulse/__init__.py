# reviewpulse/__init__.py

"""
ReviewPulse review analytics backend.

Turns raw review records into gap-filled trend series and point-in-time
summary statistics for a multi-tenant review dashboard.
"""

__version__ = "1.0.0"
