"""StyleCode numerator service.

Assigns sequential StyleCodes to PLM styles through a single ordered queue so
that concurrent requests never compute the same sequence number.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
