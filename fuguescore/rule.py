# -----------------------------------------------------------------------------
# Name:         rule.py
# Purpose:      Object for storing a rule that recognizes a figure
#
# Author:       fuguescore contributors
# License:      BSD, see license.txt
# -----------------------------------------------------------------------------
"""
Rule
====

The PatternRule class stores one rule of the pattern recognizer: a name and
a predicate that, given a dissonant event and a voice number, returns a
:py:class:`~results.PatternMatch` or None."""

# -----------------------------------------------------------------------------
# MAIN CLASS
# -----------------------------------------------------------------------------


class PatternRule():
    """A rule for recognizing a named contrapuntal figure. Rules are kept
    in an ordered list; the recognizer stops at the first rule that
    matches. Within a rule, voice 1 is tried before voice 2."""
    validVoices = (1, 2)

    def __init__(self, name, predicate, description=None):
        self.name = name  # suspension, passing, cambiata ...
        self.predicate = predicate
        self.description = description

    def apply(self, event):
        for voice in self.validVoices:
            match = self.predicate(event, voice)
            if match is not None:
                return match
        return None

    def __repr__(self):
        return str(self.name)

# -----------------------------------------------------------------------------


if __name__ == "__main__":
    # self_test code
    pass
# -----------------------------------------------------------------------------
# eof
