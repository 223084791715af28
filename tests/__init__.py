"""
Test suite for the relentless tracker.

This package contains:
- Unit tests for the date codec, completion log and analytics
- Storage, identity and import/export tests against temp directories
- CLI dispatch and end-to-end command tests
"""
