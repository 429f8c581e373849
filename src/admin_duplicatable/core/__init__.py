"""Core duplication logic.

This package contains:
- duplicatable: registers duplication on an admin screen
- copier: association-aware deep copies of records
- flash: session-backed notices shown after redirects

The copier is framework-agnostic; the other modules depend on Starlette
and are imported from their own modules.
"""

from admin_duplicatable.core.copier import DeepCopier, ModelDeepCopier

__all__ = ["DeepCopier", "ModelDeepCopier"]
