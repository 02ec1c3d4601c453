"""Service layer: validation and transaction boundaries for route handlers."""
