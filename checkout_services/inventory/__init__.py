"""Inventory and audit log: models, file store, endpoints and the service command."""

__all__ = ["controller", "models", "queries", "removals", "store", "updates"]