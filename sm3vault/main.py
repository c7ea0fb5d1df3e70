"""
SM3 Vault - Main Entry Point
Prints the SM3 digests of two fixed example messages.
"""

from .core_crypto.sm3 import sm3_words, format_words

EXAMPLE_MESSAGES = [
    "abc",
    "abcd" * 16,
]


def main():
    """Main entry point for SM3 Vault."""
    print("=" * 50)
    print("SM3 Vault")
    print("=" * 50)
    for message in EXAMPLE_MESSAGES:
        words = sm3_words(message.encode())
        print(f"Hash of '{message}' is {format_words(words)}")

if __name__ == "__main__":
    main()
