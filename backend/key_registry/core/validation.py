# key_registry/core/validation.py

from email_validator import EmailNotValidError, validate_email

from key_registry.core.errors import InvalidEmailError

# Any well-formed public suffix; stands in for a reserved one when re-checking
_NEUTRAL_SUFFIX = "example.com"


def _check_syntax(email: str) -> None:
    validate_email(
        email,
        check_deliverability=False,
        test_environment=True,
        allow_domain_literal=True,
    )


def is_valid_email(email: str) -> bool:
    """
    Syntax-only check: local part, @, dotted domain or [address literal].
    No DNS lookups. Reserved names (.local, .onion, ...) are accepted as long
    as they are well formed.
    """
    try:
        _check_syntax(email)
    except EmailNotValidError as e:
        if "special-use or reserved" not in str(e):
            return False
        local, _, domain = email.rpartition("@")
        if "." not in domain:
            return False
        try:
            _check_syntax(f"{local}@{domain}.{_NEUTRAL_SUFFIX}")
        except EmailNotValidError:
            return False
    return True


def ensure_valid_email(email: str) -> str:
    """Return the email unchanged, or raise InvalidEmailError."""
    if not is_valid_email(email):
        raise InvalidEmailError(email)
    return email
