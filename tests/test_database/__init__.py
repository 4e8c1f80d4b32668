"""
Database unit tests for the Legal Scrutiny Report generator.

This package contains unit tests for all database operations
including templates, deeds, deed types and drafts.
"""
