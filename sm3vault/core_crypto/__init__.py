# Core Cryptography Module
"""
Core cryptographic implementations including:
- SM3 hashing (padding, message expansion, compression)
"""
