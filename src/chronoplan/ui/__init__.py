"""Terminal user interface for ChronoPlan."""

from chronoplan.ui.error_messages import get_user_friendly_error
from chronoplan.ui.terminal import render_groups, render_month

__all__ = ["get_user_friendly_error", "render_groups", "render_month"]
