"""User Service - user CRUD API with asynchronous domain event notification."""

__version__ = "1.0.0"
