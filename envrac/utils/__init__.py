"""Shared helpers: logging, settings and configuration loading."""
