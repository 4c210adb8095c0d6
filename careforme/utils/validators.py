"""Validation utilities"""
import re


def validate_email(email: str) -> bool:
    """Validate email format"""
    if not isinstance(email, str) or not email:
        return False

    pattern = r'^[\w\.\+-]+@[\w\.-]+\.\w+$'
    return bool(re.match(pattern, email.strip()))


def validate_phone(phone: str) -> bool:
    """Validate phone number format"""
    if not isinstance(phone, str) or not phone:
        return False

    # Remove common formatting characters
    cleaned = re.sub(r'[\s\-\(\)\+\.]', '', phone)

    # 7-15 digits covers local and E.164 numbers
    return bool(re.match(r'^\d{7,15}$', cleaned))


def is_blank(value) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())
