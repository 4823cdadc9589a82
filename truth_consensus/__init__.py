"""Multi-source claim verification and consensus engine."""

__version__ = "0.1.0"
