"""
hackathon_web.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories for users and sessions.
"""

# Package marker.
