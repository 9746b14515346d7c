"""
db/ - Database Layer
====================
Connection providers, schema provisioning, and data-access exceptions.
This layer sits below the repositories and hands them ready-to-use connections.
"""
