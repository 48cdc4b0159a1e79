"""Wayback Machine access.

Sub-modules:
- ``config``      — endpoint paths, CDX parameters, timestamp formats
- ``timestamps``  — CDX timestamp parsing and formatting
- ``cdx``         — index lookup filtered to the retention window

No credentials are required.  The Internet Archive's infrastructure can be
fragile; callers retry page loads and space them out.
"""
