"""
Shared Kernel Module
====================

This module contains shared infrastructure used across all bounded contexts
(identity, monitors, heartbeats, notifications, status pages).

Architecture Pattern: Modular Monolith
- Each module is a bounded context
- Shared kernel contains only generic infrastructure
- Domain models are extended within each module

DO NOT add business logic from a bounded context to the shared kernel.
"""
