"""Headless browser side of the harvester.

Sub-modules:
- ``config``             — Playwright wait strategy, page script, user agent
- ``browser``            — ``RenderingSession`` protocol and the Playwright session
- ``navigation``         — bounded retry around a page load
- ``content_extractor``  — rendered text extraction and whitespace normalization
"""
