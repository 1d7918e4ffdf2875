"""Prefix command dispatcher for chat bots."""
