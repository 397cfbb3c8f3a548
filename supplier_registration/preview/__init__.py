"""Preview: operator-facing renderings of a registration."""

from .formatter import TransactionPreviewFormatter

__all__ = ["TransactionPreviewFormatter"]
