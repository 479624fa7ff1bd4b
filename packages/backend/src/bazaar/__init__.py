"""Bazaar — multi-tenant marketplace backend.

REST endpoints for accounts, community posts and likes, seller stores and
their theme customization, and personal transaction ledgers, plus a small
websocket relay for conversation messages.
"""

__version__ = "0.1.0"
