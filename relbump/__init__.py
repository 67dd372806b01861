"""relbump: release version bump, changelog splice, commit/tag/push."""

__version__ = "0.1.0"
