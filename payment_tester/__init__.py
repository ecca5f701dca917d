"""Conformance test harness for the payment instructions API."""

__version__ = "0.1.0"
