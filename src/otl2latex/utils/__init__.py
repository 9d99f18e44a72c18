"""Utility helpers for otl2latex."""
