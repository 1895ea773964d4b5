"""
Top-level package for OneMonthFlow.

The HTTP API, the feature services and the storage layer live under
``app``.  The two command line programs (``console`` for the menu
driven shell and ``github_import`` for the organisation importer) sit
next to it so they can be installed as console scripts.
"""

__all__ = []
