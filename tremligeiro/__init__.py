"""Order service core for a fast-food point of sale: entities, persistence, use cases and HTTP handlers."""

__version__ = "1.0.0"