"""HTTP/JSON proxy for Farcaster hub reads."""

__version__ = "0.1.0"
