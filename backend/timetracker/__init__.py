"""
TimeTracker Backend - Application Package
=========================================

A CRUD API for tracking billable hours: users, clients, projects and
time entries.

Request pipeline:

    ┌──────────────┐   ┌──────────────┐   ┌───────────────┐   ┌──────────────┐
    │ Rate Limit   │──▶│ Token        │──▶│ Role check    │──▶│ Service      │
    │ (middleware) │   │ (dependency) │   │ (dependency)  │   │ (+ paginate) │
    └──────────────┘   └──────────────┘   └───────────────┘   └──────────────┘

Layers:
    routes/     HTTP concerns only (status codes, Location headers)
    services/   business rules; return view models or None for "not found"
    schemas/    Pydantic input/view models (the wire contract)
    models/     SQLAlchemy ORM entities
    store.py    thin record-store facade over an AsyncSession
"""

__version__ = "1.0.0"
