"""Redacted request/response tracing."""
