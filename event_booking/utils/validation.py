"""
Validation utilities for contact fields and free text.
"""

import re
from typing import Optional, Tuple

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s+\-()]+$")
MIN_PHONE_CHARACTERS = 10


class ValidationUtils:
    """Validation utilities for various data types."""

    @staticmethod
    def validate_required(value: Optional[str], label: str) -> Tuple[bool, Optional[str]]:
        """
        Validate that a text field is present and not blank.

        Args:
            value: Field value
            label: Human-readable field name used in the message

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not value or not value.strip():
            return False, f"{label} is required"
        return True, None

    @staticmethod
    def validate_email(email: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate an email address of the form ``local@domain.tld``.

        Args:
            email: Email address to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not email or not email.strip():
            return False, "Email is required"
        if not EMAIL_PATTERN.match(email.strip()):
            return False, "Please enter a valid email address"
        return True, None

    @staticmethod
    def validate_phone(phone: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate a phone number.

        Allowed characters are digits, spaces, ``+``, ``-`` and parentheses,
        and at least ten of the characters must be non-whitespace.

        Args:
            phone: Phone number to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not phone or not phone.strip():
            return False, "Phone number is required"

        phone = phone.strip()
        if not PHONE_PATTERN.match(phone):
            return False, "Please enter a valid phone number"

        significant = re.sub(r"\s", "", phone)
        if len(significant) < MIN_PHONE_CHARACTERS:
            return False, "Please enter a valid phone number"

        return True, None

    @staticmethod
    def sanitize_text(text: Optional[str]) -> str:
        """
        Sanitize text by removing control characters.

        Args:
            text: Text to sanitize

        Returns:
            Sanitized text
        """
        if not text:
            return ""

        # Remove control characters except newlines and tabs
        text = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", text)

        return text.strip()
