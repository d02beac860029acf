"""Shared text and URL utilities."""
