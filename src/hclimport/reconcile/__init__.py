"""Reconciliation of remote resources with the local declarations file."""

from .orchestrator import reconcile, render_definition_headers, render_state
from .workflow import run_import, ImportResult

__all__ = ["reconcile", "render_definition_headers", "render_state", "run_import", "ImportResult"]
