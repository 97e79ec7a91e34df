"""
Email address helpers for the accounts app.

This module provides:
- A normalization helper (`normalize_email_address`) so the same mailbox
  always maps to the same account row, cache key and signed context.
- A masking helper (`mask_email`) used whenever an address is written to
  the logs or echoed back to an unauthenticated caller.

Examples:
    >>> normalize_email_address("  Ada.Lovelace@Example.COM ")
    'ada.lovelace@example.com'
    >>> mask_email("ada.lovelace@example.com")
    'a***********@example.com'
    >>> mask_email("x@example.com")
    '*@example.com'
"""


def normalize_email_address(value):
    """
    Normalize an email address for storage and lookup.

    Strips surrounding whitespace and lower-cases the whole address.
    Returns the input unchanged when it is empty or None.

    Args:
        value (str | None): Raw address as submitted.

    Returns:
        str | None: The normalized address.
    """

    if not value:
        return value
    return value.strip().lower()


def mask_email(value):
    """
    Hide the local part of an address, keeping its first character.

    Args:
        value (str | None): The address to mask.

    Returns:
        str: The masked address, or an empty string for empty input.
    """

    if not value:
        return ""

    local, sep, domain = value.partition("@")
    if not sep:
        return "*" * len(value)

    if len(local) <= 1:
        return f"{'*' * len(local)}@{domain}"
    return f"{local[0]}{'*' * (len(local) - 1)}@{domain}"
