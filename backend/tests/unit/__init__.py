"""
Unit tests package.

Contains isolated unit tests for the calendar and money helpers, the
services (against mocked repositories) and the appointment repository
(against an in-memory SQLite database).
"""
