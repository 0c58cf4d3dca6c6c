"""Shared model base classes."""

from .base import BridgeBaseModel


__all__ = ["BridgeBaseModel"]
