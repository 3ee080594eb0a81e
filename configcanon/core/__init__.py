# configcanon/core/__init__.py

"""Core domain models and utilities used across the canonicalizer.

This package provides the format and server type definitions, domain types,
exceptions, and the file-identity table loader shared by the rest of the
application.
"""
