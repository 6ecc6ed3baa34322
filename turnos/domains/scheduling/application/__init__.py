"""
Scheduling Application Layer

Use cases for publishing, booking, rescheduling and listing slots.
"""
