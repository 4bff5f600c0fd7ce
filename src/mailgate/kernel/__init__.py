"""Kernel – errors, value types and security primitives with no I/O."""
