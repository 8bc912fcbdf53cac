"""Data model, colors, errors and request validation."""
