"""
State-wise CPI-AL/RL analytics engine.

Turns monthly Agricultural Labourer / Rural Labourer price indices into
per-state forecasts, AL/RL stress assessments, threshold alerts and a
composite risk ranking.
"""

__version__ = "1.0.0"
