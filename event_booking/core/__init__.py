"""
Core domain types for the event booking wizard.
"""
