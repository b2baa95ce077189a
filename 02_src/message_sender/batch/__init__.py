"""Batch generation module."""

from .generator import create_messages

__all__ = ["create_messages"]
