"""dotsetup: workstation provisioning (Python-first, manifest-driven).

Core design goals:
- Idempotent steps
- One distribution profile, detected once and passed explicitly
- Fail fast on the first failing command
- Centralized logging
"""

__all__ = []
