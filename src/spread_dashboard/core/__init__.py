"""
Core data and analytics layer.

This package contains:
- schema: typed rows and the fixed country / colour vocabulary
- data_loader: fetch CSV text and parse it into typed records
- stats: null-safe mean and standard deviation
- grouping: partition records by a field
- regression: parse and format regression coefficient tables
"""
