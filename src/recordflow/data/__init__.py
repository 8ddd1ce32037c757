"""Bundled sample datasets and schema documents."""
