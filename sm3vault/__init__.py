"""
SM3 Vault - SM3 cryptographic hash implemented from scratch.
"""

__version__ = "1.0.0"
