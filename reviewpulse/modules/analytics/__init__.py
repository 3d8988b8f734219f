# reviewpulse/modules/analytics/__init__.py

"""
Review Analytics Module

Turns stored review records into the numbers a review dashboard renders:
- Review volume trends (7 days, 30 days, 3 months, 12 months)
- Reply rate and response time trends (7 days, 30 days, 3 months)
- Lifetime summary statistics with rating distribution
- Per-tenant roster of summaries

Key Components:
- Services: period resolution, bucketing, trend aggregation, gap filling,
  summary aggregation and the ReviewAnalyticsService facade
- Stores: the ReviewRecordStore contract with in-memory and SQLAlchemy adapters
- Schemas: review record input and trend/summary output models
"""

__version__ = "1.0.0"
