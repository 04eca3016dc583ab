"""Headless application layer."""
