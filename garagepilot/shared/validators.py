"""Shared validation utilities"""

import re
from typing import Optional

# ISO 3779: 17 characters, letters I, O and Q are never used
VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_vin(vin: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a vehicle identification number.

    Returns:
        Upper-cased VIN with surrounding whitespace removed

    Raises:
        ValueError: If the VIN is not 17 valid characters
    """
    if not vin:
        return vin

    vin = vin.strip().upper()
    if not VIN_PATTERN.match(vin):
        raise ValueError("VIN must be 17 characters (letters I, O and Q are not allowed)")
    return vin


def normalize_license_plate(plate: Optional[str]) -> Optional[str]:
    """Upper-case a licence plate and collapse internal whitespace"""
    if not plate:
        return plate
    return " ".join(plate.upper().split())
