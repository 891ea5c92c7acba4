"""
Monitors Bounded Context
========================

Configured HTTP, ping and TCP checks: CRUD, channel links and dashboards.
"""
