"""
Event booking wizard: date, service, customization and contact steps.
"""

__version__ = "1.0.0"
