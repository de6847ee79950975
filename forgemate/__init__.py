"""Laravel scaffolding from model definitions."""

__version__ = "0.1.0"
