"""Persistence for the trade journal."""
