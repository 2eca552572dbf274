"""
Network CRM Analytics

Relationship health, follow-up cadence and networking score for a contact book.
"""

__version__ = "0.1.0"
