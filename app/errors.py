"""Engine errors.

Degenerate data (a unit with no votes, an empty region) is not an error and
never raises. These cover caller misuse of the targeted solver only.
"""


class SwingError(Exception):
    """Base class for projection engine errors."""

    def __init__(self, message: str = "Swing engine error"):
        self.message = message
        super().__init__(self.message)


class EmptyScopeError(SwingError):
    """Solver scope has no units or zero aggregate turnout."""

    def __init__(self, message: str = "No baseline turnout in scope"):
        super().__init__(message)


class InvalidTargetError(SwingError):
    """Target margin is not a finite number."""

    def __init__(self, message: str = "Target margin must be a finite number of pp"):
        super().__init__(message)
