"""Disaster alert aggregation.

Merges the NASA EONET satellite event feed and the USGS earthquake feed
into one geo-filtered list ranked by severity, then distance.
"""

__version__ = "1.0.0"
