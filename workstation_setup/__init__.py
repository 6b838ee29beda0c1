"""Workstation setup (Python-first, step-driven).

Core design goals:
- Ordered, idempotent steps
- Best-effort: one broken tool never blocks the rest
- Commands as argv lists, never shell strings
- Centralized logging with a persistent error log
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
