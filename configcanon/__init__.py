# configcanon/__init__.py

"""Canonical, secret-redacted text for Minecraft server config files.

Two configs that differ only in key order, comments, blank lines or redacted
secrets canonicalize to the same text, so they hash and compare equal.
"""

__version__ = "0.1.0"
