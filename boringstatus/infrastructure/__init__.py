"""
Infrastructure Layer
=====================

Low-level technical concerns shared by every bounded context:
- Database connection management
- Session lifecycle
"""
