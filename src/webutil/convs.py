import logging
import re

logger = logging.getLogger(__name__)

# Plain decimal with an optional sign. int() alone would also accept
# surrounding whitespace, underscores and non-ASCII digits.
DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(value):
    if not DECIMAL_PATTERN.fullmatch(value):
        raise ValueError(f"invalid decimal integer: {value!r}")
    return int(value)


def parse_ints(*values):
    """Parse every value as a decimal integer, failing on the first bad one."""
    ints = []
    for value in values:
        try:
            ints.append(parse_int(value))
        except ValueError as exc:
            logger.error("Error %s parsing %r", exc, value)
            raise
    return ints
