"""Crafting plan backend package.

Purpose: Resolve a desired item and count into an ordered plan of collect,
smelt and craft steps, and serve those plans to executor clients over a
WebSocket.

"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
