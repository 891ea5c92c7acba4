"""
Heartbeats Bounded Context
==========================

Check results reported by agents: ingestion, history, aggregation, alert
evaluation and development data generators.
"""
