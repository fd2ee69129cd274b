"""MXN/USD exchange rate API backed by Wise, exchangerate.host and Banxico."""

__version__ = "1.0.0"
