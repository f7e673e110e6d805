"""
Parsing of user-typed numbers.

Every parser returns (value, None) on success or (None, InputError) on
failure. Nothing is silently dropped from the input: apart from
surrounding whitespace, the whole string has to be a number.
"""

import enum
import math
import re

from .reference import DEFAULT_PRECISION_DIGITS, to_mpf


class InputError(enum.Enum):
    EMPTY = 'empty input'
    MALFORMED = 'not a number'
    MALFORMED_EXPONENT = 'malformed exponent'
    OUT_OF_RANGE = 'out of range'

    def __str__(self):
        return self.value


# Optional sign, digits with an optional fraction (or a bare fraction),
# then the exponent part which is checked on its own
_MANTISSA = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)')
_EXPONENT = re.compile(r'^[eE][+-]?\d+$')
_INTEGER = re.compile(r'^[+-]?\d+$')

MAX_DEPTH = 10_000_000
MAX_EXPONENT = 100_000


def parse_decimal(text):
    """
    Parse a decimal number such as '-0.75', '.5' or '1.2e-40'.

    The text is kept as a string on success so callers can convert it
    at whatever precision they need.

    Returns:
        (normalized_text, None) or (None, InputError)
    """
    if text is None:
        return None, InputError.EMPTY
    s = text.strip()
    if not s:
        return None, InputError.EMPTY

    match = _MANTISSA.match(s)
    if not match:
        return None, InputError.MALFORMED

    rest = s[match.end():]
    if rest:
        if rest[0] not in 'eE':
            return None, InputError.MALFORMED
        if not _EXPONENT.match(rest):
            return None, InputError.MALFORMED_EXPONENT
        if abs(int(rest[1:])) > MAX_EXPONENT:
            return None, InputError.OUT_OF_RANGE

    # Canonical form: no '+' sign, a digit on both sides of the point
    mantissa = match.group(0)
    sign = '-' if mantissa.startswith('-') else ''
    mantissa = mantissa.lstrip('+-')
    if mantissa.startswith('.'):
        mantissa = '0' + mantissa
    if mantissa.endswith('.'):
        mantissa += '0'
    return sign + mantissa + rest.lower(), None


def parse_radius(text):
    """
    Parse a zoom radius: a finite, positive double.

    Returns:
        (radius, None) or (None, InputError)
    """
    s, error = parse_decimal(text)
    if error:
        return None, error
    radius = float(s)
    # Underflow to zero or overflow to inf are both out of range
    if not math.isfinite(radius) or radius <= 0:
        return None, InputError.OUT_OF_RANGE
    return radius, None


def parse_depth(text):
    """
    Parse an iteration depth: a positive integer up to MAX_DEPTH.

    Returns:
        (depth, None) or (None, InputError)
    """
    if text is None or not text.strip():
        return None, InputError.EMPTY
    s = text.strip()
    if not _INTEGER.match(s):
        return None, InputError.MALFORMED
    depth = int(s)
    if depth <= 0 or depth > MAX_DEPTH:
        return None, InputError.OUT_OF_RANGE
    return depth, None


def parse_center(re_text, im_text, precision_digits=DEFAULT_PRECISION_DIGITS):
    """
    Parse both parts of a center coordinate at full precision.

    Returns:
        ((re_mpf, im_mpf), None) or (None, (part, InputError)) where part
        is 'real' or 'imaginary'
    """
    re_s, error = parse_decimal(re_text)
    if error:
        return None, ('real', error)
    im_s, error = parse_decimal(im_text)
    if error:
        return None, ('imaginary', error)
    return (to_mpf(re_s, precision_digits), to_mpf(im_s, precision_digits)), None
