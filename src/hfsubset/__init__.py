"""hfsubset: Hydrofabric Subsetter client.

Requests a hydrofabric subset from a remote hfsubset service and writes the
returned GeoPackage to disk.
"""

__version__ = "0.1.0"
