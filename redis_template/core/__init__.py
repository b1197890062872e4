"""
Core layer: configuration, logging, exceptions and interfaces.
"""
