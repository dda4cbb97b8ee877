"""Packaged JSON schemas for grammarbuild configuration files."""
