"""
Resource duplication for auto-generated admin screens.

This package adds a "duplicate" action to admin screens, either by
pre-filling the creation form with a copy of an existing record or by
persisting the copy straight away and redirecting to its edit view.
"""

__version__ = "0.1.0"

from admin_duplicatable.adapters.screen import AdminScreen
from admin_duplicatable.config import DuplicationConfig
from admin_duplicatable.core.duplicatable import Duplicatable, duplicatable
from admin_duplicatable.models import DuplicationStrategy

__all__ = [
    "__version__",
    "AdminScreen",
    "Duplicatable",
    "DuplicationConfig",
    "DuplicationStrategy",
    "duplicatable",
]
