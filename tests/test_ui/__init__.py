"""
UI helper tests for the Legal Scrutiny Report generator.
"""
