"""Turnos - medical appointment booking backend."""
