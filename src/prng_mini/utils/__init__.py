"""
Utility functions for prng-mini.

secure_buffer is imported here; histogram, key_list and signatures build on
the core package and are imported from their own modules.
"""

from .secure_buffer import SecureBuffer, secure_release

__all__ = ['SecureBuffer', 'secure_release']
