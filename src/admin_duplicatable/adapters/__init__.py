"""Framework adapters for admin screens.

- screen.py: AdminScreen serving a resource's views as Starlette routes,
  usable from Starlette and FastAPI applications.
"""

from admin_duplicatable.adapters.screen import AdminScreen, ViewContext

__all__ = ["AdminScreen", "ViewContext"]
