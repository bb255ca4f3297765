# hiretrack/__init__.py
"""
HireTrack - job-application tracking backend

- Fixed hiring pipeline: Applied -> Screening -> Interview -> Offer -> Hired (or Rejected)
- Atomic stage changes with an append-only audit trail
- Asynchronous e-mail notifications through a Redis-backed work queue
"""

__version__ = "0.1.0"
