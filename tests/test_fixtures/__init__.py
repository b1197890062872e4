"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .template_factory import TemplateTestFactory

__all__ = ["TemplateTestFactory"]
