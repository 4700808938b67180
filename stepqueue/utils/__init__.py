"""Shared utilities for stepqueue."""
