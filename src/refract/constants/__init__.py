"""Shared constants for Refract."""
