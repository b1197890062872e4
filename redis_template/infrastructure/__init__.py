"""
Connection bindings: redis-py for real servers, in-memory for tests and development.
"""
