"""Security package."""
