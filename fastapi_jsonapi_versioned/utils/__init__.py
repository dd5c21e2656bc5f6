"""Utility helpers for JSON:API parameters and payloads."""

from .collections import is_sequence
from .include import parse_include

__all__ = ["is_sequence", "parse_include"]
