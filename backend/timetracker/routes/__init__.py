"""
TimeTracker Backend - API Routes Package
========================================

Route Inventory (every resource router is mounted under /api; clients,
projects and time entries are also mounted under the deprecated /api/v1
prefix):
    - users.py:         /users, /users/{id}
    - clients.py:       /clients, /clients/{id}
    - projects.py:      /projects, /projects/{id}
    - time_entries.py:  /time-entries, /time-entries/{id},
                        /time-entries/user/{user_id}/{year}/{month}
    - auth.py:          GET /get-token   (demo token issuance)
    - health.py:        GET /health

Routes stay thin: parse the request, call the service, translate a None
result into NotFoundError, and pick the status code and headers.
"""
