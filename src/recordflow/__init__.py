"""
Recordflow: Multi-format record processing.

This package loads datasets encoded as delimited text, structured objects
or markup, optionally validates them against a schema, filters records by
category and aggregates a numeric field.
"""

from importlib.metadata import version

__version__ = version("recordflow")

__all__ = ["__version__"]
