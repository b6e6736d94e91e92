"""Authentication and inventory HTTP microservices for an automated checkout."""

__version__ = "1.0.0"