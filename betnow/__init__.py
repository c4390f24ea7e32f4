"""In-memory order book engine for two-team match betting, with HTTP services."""

__version__ = "0.1.0"