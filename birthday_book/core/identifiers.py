class InvalidIdentifier(ValueError):
    """Raised when a path segment is not a usable record id or page number."""


NO_TARGET = 0
MAX_IDENTIFIER = 2**63 - 1


def parse_identifier(raw: str | None) -> int:
    """Convert a record id or page number taken from the request path.

    An omitted segment means "no specific record" and parses to ``NO_TARGET``.
    Anything other than plain decimal digits, or a value wider than a signed
    64-bit column, is rejected.
    """
    if raw is None or raw == "":
        return NO_TARGET
    if not raw.isascii() or not raw.isdigit():
        raise InvalidIdentifier(f"not a valid identifier: {raw!r}")
    value = int(raw)
    if value > MAX_IDENTIFIER:
        raise InvalidIdentifier(f"identifier out of range: {raw!r}")
    return value
