"""Kernel security – sensitive-field registry and secret masking."""
from mailgate.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS, MASK, mask_secret

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "MASK", "mask_secret"]
