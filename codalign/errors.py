"""Exceptions raised by codalign.

Precondition failures (bad frame length, ragged profiles) are user errors
and are raised before any DP matrix is allocated. ``TracebackError`` marks
an engine defect: it should never be seen on well-formed input.
"""


class CodalignError(Exception):
    """Base exception for all codalign errors.

    Args:
        message: What went wrong
        suggestion: What the caller should do about it
    """

    def __init__(self, message, suggestion=None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.formatted())

    def formatted(self):
        msg = self.message
        if self.suggestion:
            msg += f'\n  Suggestion: {self.suggestion}'
        return msg


class FrameLengthError(CodalignError, ValueError):
    """Raised when an operand that must hold whole codons does not.

    Args:
        length: Offending sequence (or profile) length
        operand: Which operand failed the check
    """

    def __init__(self, length, operand='reference'):
        super().__init__(
            f'The {operand} coding sequence length must be a multiple '
            f'of 3 ({length}).',
            suggestion='Trim or pad the sequence to whole codons')
        self.length = length
        self.operand = operand


class ProfileShapeError(CodalignError, ValueError):
    """Raised when sequences of differing lengths are folded into one
    profile."""

    def __init__(self, lengths):
        super().__init__(
            'Profile matrix requires all strings of same length '
            f'(got lengths {sorted(set(lengths))}).',
            suggestion='Pass the rows of a finished alignment')
        self.lengths = lengths


class TracebackError(CodalignError, RuntimeError):
    """Raised when the backtracking walk leaves the recorded path."""

    def __init__(self, i, j, reason):
        super().__init__(f'Traceback failed at cell ({i}, {j}): {reason}.')
        self.i = i
        self.j = j
