"""
FastAPI routers grouped by domain (auth, clinical records, health probes).

Each module exposes an APIRouter included by the app factory. Handlers map
one request onto one service or repository call and translate ClinicError
into a JSON message with the matching status code.
"""
