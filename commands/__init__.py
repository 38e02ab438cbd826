"""
Command line front end for geocalc.

This package parses command line arguments, runs the engine and prints the
results. It is the only layer that writes to stdout.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
