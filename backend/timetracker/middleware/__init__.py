"""
TimeTracker Backend - Middleware Package
========================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [Rate Limit] → [CORS] → Router

    1. Request ID: correlation id exists before anything is logged
    2. Access Log: every outcome is logged, 429s included
    3. Rate Limit: rejects reused tokens before routing and authentication
    4. CORS: FastAPI's CORSMiddleware (preflight and headers)

Starlette runs middleware in reverse order of add_middleware() calls; see
create_app() in main.py.
"""
