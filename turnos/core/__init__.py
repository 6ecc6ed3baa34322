"""
Core building blocks shared by the booking domains.
"""
