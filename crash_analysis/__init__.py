"""
Crash Analysis

Exploratory reporting over a crash-incident dataset: text normalization,
grouped aggregation with derived metrics, category reports and a
materialized summary table for visualization tools.
"""

__version__ = "0.1.0"
