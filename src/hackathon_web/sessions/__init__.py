"""
hackathon_web.sessions

HTTP session package.

Responsibilities:
- Cookie token issuing/verification for session identifiers.
- The per-request session state bag.
- The single-delivery flash queue stored in that bag.
"""

# Package marker.
