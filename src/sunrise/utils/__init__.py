"""Utility helpers for Sunrise."""
