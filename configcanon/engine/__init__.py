# configcanon/engine/__init__.py

"""Engine package providing placeholders, redaction rules, digests and the
canonicalizer itself.

This package contains the components that turn stripped config text into
its canonical, fingerprinted form.
"""
