"""Template return types and kida environment wiring."""

from paydesk.templating.returns import Template

__all__ = ["Template"]
