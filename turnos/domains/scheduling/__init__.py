"""
Scheduling Domain

Slot ("turno") publishing, reservation workflow, payment confirmation and
calendar synchronization.
"""
