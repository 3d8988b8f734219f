# reviewpulse/modules/analytics/tests/__init__.py

"""
Test suite for the review analytics module.

Covers period resolution, bucket keys, tenant matching, trend and summary
aggregation, gap filling, the record store adapters and the service facade.
"""
