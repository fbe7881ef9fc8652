"""
Pydantic request/response schemas: the API contract.

Input models are validated before any service runs and never touch the
database. View models are projections of ORM entities.
"""
