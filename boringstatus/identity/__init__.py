"""
Identity Module
===============

Bounded Context for tenancy and credentials.

Responsibilities:
- Resolve the active organization of a session-authenticated request
- Authenticate machine clients by bearer API key
- Issue, list and revoke organization API keys
"""
