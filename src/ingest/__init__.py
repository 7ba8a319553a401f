"""Registry ingestion.

This package reads DMFR registry documents and builds the cross-referenced
feed and operator catalog.
"""
