"""
hackathon_web.api

API package for the web application.

Responsibilities:
- FastAPI app factory and router modules.
- Route-level dependency wiring and form models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers stay thin: form validation + delegation to auth/session helpers + rendering.
