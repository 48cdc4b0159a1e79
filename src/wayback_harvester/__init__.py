"""Wayback Harvester.

Collects the rendered text of every distinct Wayback Machine snapshot of a
page from the last 20 years and writes it to a CSV file.

Packages:
- ``archive``  — CDX index lookup and timestamp handling
- ``scraper``  — headless browser session, navigation retries, text extraction
- ``harvest``  — deduplication, CSV sink, run orchestration
- ``core``     — data model, exceptions, logging, progress events
- ``config``   — environment-backed settings
"""

__version__ = "1.0.0"
