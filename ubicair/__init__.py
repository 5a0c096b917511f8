"""UbicAir flight dashboard: backend client and live radar helpers."""

__version__ = "0.1.0"
