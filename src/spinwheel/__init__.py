"""Spinwheel: decision wheel selection and spin analytics."""

__version__ = "0.1.0"
