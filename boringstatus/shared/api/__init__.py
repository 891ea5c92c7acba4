"""
Shared API
==========

Middleware and exception handlers registered on the FastAPI application.
"""
