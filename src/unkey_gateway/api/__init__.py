"""
unkey_gateway.api

API package for the Unkey gateway.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: presence checks + delegation to `UnkeyClient`.
