"""
reflectlab Test Suite.

This package contains:
- unit/: Unit tests per module
- integration/: Builder, parser and runner used together
"""
