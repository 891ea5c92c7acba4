"""
BoringStatus
============

Multi-tenant uptime monitoring service.

Bounded contexts:
- identity: organizations, sessions, API keys
- monitors: check definitions and dashboards
- heartbeats: check results, aggregates, alert evaluation
- notifications: alert channels and delivery
- status_pages: public status pages
"""

__version__ = "1.0.0"
