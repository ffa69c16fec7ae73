"""
Factory functions for assembling the exception handling pipeline.
"""

from errorlens.factory.facade import create_builtin_handlers, create_facade

__all__ = ["create_builtin_handlers", "create_facade"]
