"""Slipstream: monthly payslip generation and delivery pipeline."""

__version__ = "0.1.0"
