"""Shared binary, text and compression helpers."""
