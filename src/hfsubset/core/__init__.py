"""Core of hfsubset.

- Domain models, configuration, errors and the subset pipeline.
- Knows nothing about the CLI; adapters perform the HTTP and file I/O.
"""
