"""Card-based authentication: cards, people, accounts and the lookup endpoint."""

__all__ = ["controller", "models"]