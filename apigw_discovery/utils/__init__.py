"""Utility helpers for logging, correlation IDs and error sanitization."""
