"""accounts-service: customer account lifecycle and profile aggregation."""

__version__ = "0.1.0"
