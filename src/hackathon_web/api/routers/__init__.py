"""
hackathon_web.api.routers

Route modules.

Responsibilities:
- Pages (home, account forms), health checks and the not-found fallback.
"""

# Package marker.
