"""
services/ - Service Layer
=========================
Facades used by callers that want entity-level operations.
"""
