"""Core interfaces.

Protocols implemented by the adapters; the core depends on these only.
"""

from hfsubset.core.interfaces.fetcher import SubsetFetcher

__all__ = ["SubsetFetcher"]
