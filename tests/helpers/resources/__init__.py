"""Bundled default configuration files for loader tests."""
