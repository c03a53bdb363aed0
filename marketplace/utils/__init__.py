"""Shared helpers for request metadata and error payloads."""
