"""Catalog persistence.

This package writes finished catalog snapshots to disk.
"""
