"""Async client and resource store for the NiraPoth traffic-violation backend."""

__version__ = "0.1.0"
