"""
models/ - Domain Models
=======================
Plain value objects mapped to and from database rows by the repositories.
"""
