"""
SM3 Hash Implementation (From Scratch)

Implements the SM3 cryptographic hash function as defined in GB/T 32905-2016
(GM/T 0004-2012). No external hashing backend is used; the algorithm is built
from scratch on 32-bit word arithmetic.

Components:
- Padding: Pads message to multiple of 512 bits
- Message Expansion: Expands 16 words to 68 + 64 words
- Compression: 64 rounds of compression function
- Output: 256-bit (32-byte) digest
"""

from typing import Iterator, List, Sequence, Tuple


# Initial hash value (IV) defined by the standard
H_INITIAL = (
    0x7380166f, 0x4914b2b9, 0x172442d7, 0xda8a0600,
    0xa96f30bc, 0x163138aa, 0xe38dee4d, 0xb0fb0e4e
)

# Round constants T_j: one for rounds 0-15, one for rounds 16-63
T_LOW = 0x79cc4519
T_HIGH = 0x7a879d8a

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

BLOCK_SIZE = 64
DIGEST_SIZE = 32
ROUNDS = 64

# Bit length must fit in 64 bits
MAX_MESSAGE_BYTES = 1 << 61


class LengthOverflow(ValueError):
    """Raised when a message is too long for its bit length to fit in 64 bits."""
    pass


def rotate_left(value: int, amount: int) -> int:
    """Left rotate a 32-bit integer by the specified amount."""
    amount %= 32
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def _p0(x: int) -> int:
    """Permutation P0: used in compression."""
    return x ^ rotate_left(x, 9) ^ rotate_left(x, 17)


def _p1(x: int) -> int:
    """Permutation P1: used in message expansion."""
    return x ^ rotate_left(x, 15) ^ rotate_left(x, 23)


def _t(j: int) -> int:
    """Round constant for round j."""
    return T_LOW if j < 16 else T_HIGH


def _ff(x: int, y: int, z: int, j: int) -> int:
    """Boolean function FF: parity for rounds 0-15, majority afterwards."""
    if j < 16:
        return x ^ y ^ z
    return (x & y) | (x & z) | (y & z)


def _gg(x: int, y: int, z: int, j: int) -> int:
    """Boolean function GG: parity for rounds 0-15, choice afterwards."""
    if j < 16:
        return x ^ y ^ z
    return ((x & y) | (~x & z)) & MASK_32


def pad_message(data: bytes) -> bytes:
    """
    Pad the message according to the SM3 specification.

    Padding rules:
    1. Append bit '1' to message (0x80 byte)
    2. Append zeros until message length ≡ 448 (mod 512)
    3. Append original message length as 64-bit big-endian integer

    Args:
        data: The original message bytes

    Returns:
        Padded message as bytes (length is multiple of 64 bytes / 512 bits)

    Raises:
        LengthOverflow: If the bit length of data does not fit in 64 bits
    """
    # Count bytes, not items, for views over wider element types
    if isinstance(data, memoryview):
        data = data.cast('B')

    original_length = len(data)
    if original_length >= MAX_MESSAGE_BYTES:
        raise LengthOverflow(
            f"Message of {original_length} bytes exceeds the SM3 limit of "
            f"{MAX_MESSAGE_BYTES - 1} bytes"
        )
    original_bit_length = original_length * 8

    padded = bytearray(data)

    # Append the bit '1' (0x80 = 10000000 in binary)
    padded.append(0x80)

    # Zero bytes so that exactly 8 bytes remain to the block boundary
    padding_length = (BLOCK_SIZE + 56 - 1 - original_length % BLOCK_SIZE) % BLOCK_SIZE
    padded.extend(b'\x00' * padding_length)

    # Append the original length as 64-bit big-endian integer
    padded.extend(original_bit_length.to_bytes(8, byteorder='big'))

    return bytes(padded)


def _iter_blocks(padded: bytes) -> Iterator[memoryview]:
    """Yield successive 64-byte blocks of a padded message."""
    view = memoryview(padded)
    for offset in range(0, len(view), BLOCK_SIZE):
        yield view[offset:offset + BLOCK_SIZE]


def expand_block(block: bytes) -> Tuple[List[int], List[int]]:
    """
    Expand one 64-byte block into the two word arrays used by compression.

    W[0..15] are the block's big-endian words. For j from 16 to 67:
        W[j] = P1(W[j-16] ^ W[j-9] ^ (W[j-3] <<< 15)) ^ (W[j-13] <<< 7) ^ W[j-6]
    and W'[j] = W[j] ^ W[j+4] for j from 0 to 63.

    Args:
        block: Exactly 64 bytes

    Returns:
        (W, W') with 68 and 64 32-bit words
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = [int.from_bytes(block[i:i + 4], byteorder='big') for i in range(0, BLOCK_SIZE, 4)]
    for j in range(16, 68):
        x = w[j - 16] ^ w[j - 9] ^ rotate_left(w[j - 3], 15)
        w.append(_p1(x) ^ rotate_left(w[j - 13], 7) ^ w[j - 6])

    w_prime = [w[j] ^ w[j + 4] for j in range(ROUNDS)]
    return w, w_prime


def compress(state: Sequence[int], w: Sequence[int], w_prime: Sequence[int]) -> List[int]:
    """
    Perform 64 rounds of compression on the state.

    Args:
        state: Current hash state V (8 32-bit words)
        w: Expanded words W (68 32-bit words)
        w_prime: Expanded words W' (64 32-bit words)

    Returns:
        Next hash state, the round registers XORed with the incoming state
    """
    # Initialize working variables
    a, b, c, d, e, f, g, h = state

    for j in range(ROUNDS):
        a12 = rotate_left(a, 12)
        ss1 = rotate_left((a12 + e + rotate_left(_t(j), j % 32)) & MASK_32, 7)
        ss2 = ss1 ^ a12
        tt1 = (_ff(a, b, c, j) + d + ss2 + w_prime[j]) & MASK_32
        tt2 = (_gg(e, f, g, j) + h + ss1 + w[j]) & MASK_32

        # Update working variables
        d = c
        c = rotate_left(b, 9)
        b = a
        a = tt1
        h = g
        g = rotate_left(f, 19)
        f = e
        e = _p0(tt2)

    return [
        a ^ state[0], b ^ state[1], c ^ state[2], d ^ state[3],
        e ^ state[4], f ^ state[5], g ^ state[6], h ^ state[7],
    ]


def sm3_words(data: bytes) -> List[int]:
    """
    Compute the SM3 hash of the input data as eight 32-bit words.

    Args:
        data: Input bytes to hash

    Returns:
        Final state V as a list of 8 integers
    """
    padded = pad_message(data)

    state = list(H_INITIAL)
    for block in _iter_blocks(padded):
        w, w_prime = expand_block(block)
        state = compress(state, w, w_prime)

    return state


def sm3(data: bytes) -> bytes:
    """
    Compute the SM3 hash of the input data.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit (32-byte) digest as bytes

    Example:
        >>> sm3(b"abc").hex()
        '66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0'
    """
    return b''.join(word.to_bytes(4, byteorder='big') for word in sm3_words(data))


def sm3_hex(data: bytes) -> str:
    """
    Compute SM3 hash and return as hexadecimal string.

    Args:
        data: Input bytes to hash

    Returns:
        64-character hexadecimal string
    """
    return sm3(data).hex()


def sm3_string(text: str, encoding: str = 'utf-8') -> bytes:
    """
    Compute SM3 hash of a string.

    Args:
        text: Input string to hash
        encoding: String encoding (default: utf-8)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    return sm3(text.encode(encoding))


def format_words(words: Sequence[int]) -> str:
    """Render digest words as '[66c7f0f4, 62eeedd9, ...]'."""
    return "[" + ", ".join(f"{word:08x}" for word in words) + "]"


# Self-test when run directly
if __name__ == "__main__":
    # Test vectors from GB/T 32905-2016 Appendix A
    test_cases = [
        (b"abc", "66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0"),
        (b"abcd" * 16, "debe9ff92275b8a138604889c18e5a4d6fdb70e5387e5765293dcba39c0c5732"),
    ]

    print("SM3 Implementation Test")
    print("=" * 60)

    all_passed = True
    for data, expected in test_cases:
        result = sm3_hex(data)
        passed = result == expected
        all_passed = all_passed and passed

        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"\nInput: {data[:50]}{'...' if len(data) > 50 else ''}")
        print(f"Expected: {expected}")
        print(f"Got:      {result}")
        print(f"Status:   {status}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
