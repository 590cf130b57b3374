"""Utility helpers for Pomotask CLI."""
