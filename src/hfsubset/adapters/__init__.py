"""Adapters: HTTP and file I/O around the core.

- URL construction, service verification, fetch strategies, output writing.
"""
