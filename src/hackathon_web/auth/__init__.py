"""
hackathon_web.auth

Authentication package.

Responsibilities:
- Password hashing helpers.
- The credential store (authenticate / serialize / deserialize principals).
- Session-backed login and logout operations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# There is no authorization layer: a request is either anonymous or has a Principal.
