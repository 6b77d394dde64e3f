"""Core: configuration and shared constants."""
