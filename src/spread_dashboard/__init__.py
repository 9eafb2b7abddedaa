"""
Data layer for the eurozone sovereign spreads dashboard.

This package contains:
- config: data source locations and HTTP settings
- core: CSV loading, statistics, grouping, regression table helpers
- store: observable holders shared by display components
"""
