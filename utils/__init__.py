"""
utils/ - Shared Helpers
=======================
"""
