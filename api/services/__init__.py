"""Service layer for business logic.

Services encapsulate validation, defaults and response shaping, keeping
routes thin and focused on HTTP handling.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain all business rules and validation
- Raise core.errors exceptions for client-visible failures
- Orchestrate calls to repositories

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
"""
