"""
Fingerprinting utilities for generating stable artifact identities.

A fingerprint is a weak, non-cryptographic identity. It only needs to give
the same artifact the same classification; it is not meant to detect
duplicates across sessions or to resist collisions.

Character codes are UTF-16 code units and trimming uses the browser's
whitespace set (which includes the byte order mark), so fingerprints agree
with those computed by the web client.
"""
import struct

from neuroscope.detection.artifact import Artifact

# ECMAScript WhiteSpace and LineTerminator characters
TRIM_CHARS = "\t\n\v\f\r " + "".join(
    chr(code) for code in (
        0x00A0, 0x1680, *range(0x2000, 0x200B),
        0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
    )
)


def trim_text(value: str) -> str:
    """Strip leading and trailing whitespace, BOM included."""
    return value.strip(TRIM_CHARS)


def utf16_units(value: str):
    """UTF-16 code units of a string (astral characters count twice)."""
    data = value.encode("utf-16-le", errors="surrogatepass")
    return struct.unpack(f"<{len(data) // 2}H", data)


def text_length(value: str) -> int:
    """Length of a string in UTF-16 code units."""
    return len(utf16_units(value))


def char_code_sum(value: str) -> int:
    """Sum of the UTF-16 character codes of a string."""
    return sum(utf16_units(value))


def fingerprint_text(content: str) -> str:
    """Fingerprint text by the character-code sum of its trimmed content."""
    return str(char_code_sum(trim_text(content)))


def fingerprint_file(
    name: str,
    byte_size: int,
    mime_type: str,
    last_modified: int
) -> str:
    """Fingerprint a file from its observable metadata."""
    return f"{name}-{byte_size}-{mime_type}-{last_modified}"


def fingerprint(artifact: Artifact) -> str:
    """
    Derive the fingerprint of an artifact.

    Pure function of the artifact's fields; never reads the clock.
    """
    if artifact.is_text:
        return fingerprint_text(artifact.raw_content)

    return fingerprint_file(
        name=artifact.original_name or "",
        byte_size=artifact.byte_size,
        mime_type=artifact.declared_mime_type,
        last_modified=artifact.last_modified or 0,
    )


def seed_from_fingerprint(value: str) -> float:
    """
    Reduce a fingerprint to a seed in [0, 1).

    seed = (sum_of_char_codes mod 100) / 100, where a text fingerprint
    already is the sum and a file fingerprint is summed here.
    """
    if value.isdigit():
        code_sum = int(value)
    else:
        code_sum = char_code_sum(value)
    return (code_sum % 100) / 100
