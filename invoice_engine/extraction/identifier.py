"""
Business Identifier Checksum.

Validates the 11-digit Australian Business Number (ABN). Every ABN
candidate found by the extraction cascade passes through here before it
is accepted.
"""

import re
from typing import Optional


class IdentifierValidator:
    """
    Validates Australian Business Numbers with the modulus-89 checksum.

    Algorithm:
        Subtract 1 from the first digit, multiply each digit by its
        weight, sum, and accept when the sum is divisible by 89.

    Example:
        >>> IdentifierValidator.validate("51824753556")
        True
        >>> IdentifierValidator.validate("12345678901")
        False
    """

    WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)
    MODULUS = 89

    _DIGITS = re.compile(r"[0-9]{11}")

    @classmethod
    def validate(cls, identifier: Optional[str]) -> bool:
        """
        Check an identifier against the checksum.

        Whitespace is ignored; anything other than exactly eleven
        decimal digits is simply not valid.

        Args:
            identifier: Candidate identifier.

        Returns:
            True if the checksum holds, False otherwise.
        """
        if not identifier:
            return False

        cleaned = ''.join(identifier.split())
        if not cls._DIGITS.fullmatch(cleaned):
            return False

        digits = [int(ch) for ch in cleaned]
        digits[0] -= 1

        total = sum(digit * weight for digit, weight in zip(digits, cls.WEIGHTS))
        return total % cls.MODULUS == 0
