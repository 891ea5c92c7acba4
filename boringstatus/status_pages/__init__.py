"""
Status Pages Bounded Context
============================

Public pages showing the status of selected monitors, optionally behind a
password.
"""
