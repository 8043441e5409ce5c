"""
Services module for business logic.

- costing/: pure cost calculation, mix aggregation, name rules, resolution
- domain/: application services (transactions, audit) - USE THESE
- audit: audit log entries
- base_service: BaseCRUDService shared by the domain services

Submodules are imported explicitly; this package re-exports nothing so the
repositories can depend on costing.ports without a cycle.

Usage:
    from rest_api.services.domain import MixService
    service = MixService(db)
    mix = service.create(body, user_id, user_email)
"""
