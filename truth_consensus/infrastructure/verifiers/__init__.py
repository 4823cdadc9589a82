"""Verification provider adapters."""
