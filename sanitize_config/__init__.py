"""
Sanitize-Core Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from sanitize_config.settings import Settings

__all__ = ["Settings"]
