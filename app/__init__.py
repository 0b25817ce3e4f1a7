"""
Helpdesk — ticketing API.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - tickets: Tickets, status workflow, checklists, comments, attachments.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, session shapes.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
