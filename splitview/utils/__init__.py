"""Utility helpers for splitview."""
