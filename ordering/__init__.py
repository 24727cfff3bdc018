"""
Order creation workflow.

This package holds the service's decision logic:
- Input validation
- User lookup via the user service
- Persistence via the order store
- Best-effort administrator notifications
"""

from ordering.workflow import OrderWorkflow, SideEffect

__all__ = [
    "OrderWorkflow",
    "SideEffect",
]
