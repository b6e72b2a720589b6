"""Reversible commands and the undo history."""
