"""Kernel types – value objects shared across layers."""
from mailgate.kernel.types.email import Address

__all__ = ["Address"]
