"""
Notifications Bounded Context
=============================

Alert destinations (email, webhook, Slack, Discord), their links to
monitors, and delivery of alert events.
"""
