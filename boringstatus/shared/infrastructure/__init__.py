"""
Shared Infrastructure
=====================

Cross-cutting technical concerns:
- Structured logging
- Resilience helpers for outbound calls
"""
