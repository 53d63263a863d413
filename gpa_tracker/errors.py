class GpaTrackerError(ValueError):
    """Base class for validation failures reported back to the caller."""


class UnknownStandard(GpaTrackerError):
    pass


class InvalidScore(GpaTrackerError):
    pass


class UnknownGrade(GpaTrackerError):
    pass


class InvalidInput(GpaTrackerError):
    pass


class DuplicateCourse(InvalidInput):
    pass
