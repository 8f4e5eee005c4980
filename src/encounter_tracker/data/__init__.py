"""Bundled data tables."""
