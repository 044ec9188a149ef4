class ScheduleConfigError(ValueError):
    """Loan parameters that no schedule can be built from."""


class ScheduleValidationError(ValueError):
    """A payment sequence that cannot be summarized into a schedule."""
