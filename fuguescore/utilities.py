# -----------------------------------------------------------------------------
# Name:         utilities.py
# Purpose:      Scripts shared among various modules
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------

import itertools
import math

# -----------------------------------------------------------------------------
# MODULE VARIABLES
# -----------------------------------------------------------------------------

# Tolerance, in beats, for comparing onsets and durations.
EPSILON = 0.01

# -----------------------------------------------------------------------------


def pairwise(span):
    """s -> (s0, s1), (s1, s2), (s2, s3), ..."""
    a, b = itertools.tee(span)
    next(b, None)
    zipped = zip(a, b)
    return list(zipped)


def sign(value):
    """Return -1, 0, or 1."""
    if value > 0:
        return 1
    elif value < 0:
        return -1
    return 0


def approxEqual(a, b, tolerance=EPSILON):
    return abs(a - b) < tolerance


def finiteOrZero(value):
    """Guard against None, NaN, and infinities in aggregated scores."""
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def formatScore(value):
    """Signed score text for detail lines, e.g. '+0.5' or '-1.25'."""
    text = f'{value:+.2f}'.rstrip('0')
    if text.endswith('.'):
        text += '0'
    return text


# -----------------------------------------------------------------------------


if __name__ == '__main__':
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
