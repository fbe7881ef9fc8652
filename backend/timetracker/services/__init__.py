"""
TimeTracker Backend - Services Layer
====================================

Business logic between routes (HTTP) and the record store (persistence).

Service Inventory:
    - CrudService (base): get_by_id / get_page / delete for one entity type
    - UserService, ClientService: plain create / update
    - ProjectService: create / update resolve client_id first
    - TimeEntryService: create resolves user and project, snapshots the
      user's hour rate; monthly timesheet query
    - TokenService: demo token issuance and bearer token validation
    - TokenRateLimiter: per-token cooldown state

Services are stateless singletons that receive the request's AsyncSession
on every call. Expected outcomes are return values: None means "not found"
(the entity itself or an entity it references). Routes translate None into
a 404.
"""
