"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (readings loaded)
- GET/POST /v1/search: Verse-reference or keyword search
- GET /v1/readings/diagnostics: Load state and discarded records
"""
