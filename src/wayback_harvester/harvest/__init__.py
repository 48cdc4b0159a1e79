"""Harvest pipeline.

Sub-modules:
- ``dedup``         — consecutive-duplicate suppression
- ``sink``          — CSV output
- ``orchestrator``  — per-run state machine tying index, browser and sink together
"""
