"""API errors and validation helpers."""

from settings import MAX_CYCLE, MIN_CYCLE


class NotFoundError(Exception):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


def validate_cycle(cycle: int | None, available: list[int]) -> None:
    """Cycle must be a plausible election year that has baseline data."""
    if cycle is None:
        return
    if not MIN_CYCLE <= cycle <= MAX_CYCLE:
        raise ValidationError(f"Invalid cycle: {cycle}. Must be between {MIN_CYCLE} and {MAX_CYCLE}")
    if cycle not in available:
        raise NotFoundError(f"No baseline loaded for cycle {cycle}")


def validate_region(region: str | None, available: list[str]) -> None:
    if region is not None and region not in available:
        raise NotFoundError(f"Unknown region: {region}")
