"""
Scheduling API Layer
"""
