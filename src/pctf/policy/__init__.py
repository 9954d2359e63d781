"""Framework configuration."""

from pctf.policy.resolver import PolicyResolver

__all__ = ["PolicyResolver"]
