"""Upstream API clients."""
