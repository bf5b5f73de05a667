"""Shared helpers (logging, HTTP) used across registry and docs clients."""
