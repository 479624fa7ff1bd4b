"""Real-time infrastructure.

- relay: room-scoped WebSocket message relay for conversations
- redis: shared optional Redis connection (rate limiting, health)
"""
