"""Core configuration types."""
