from __future__ import annotations


class ClearPathError(Exception):
    """Base class for errors raised by the screening engine."""


class InvalidCase(ClearPathError):
    """The case is missing fields the evaluator cannot work without."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Case is incomplete or invalid: " + ", ".join(self.missing_fields)
        )


class GenerationError(ClearPathError):
    """A filing package could not be produced for one relief type."""

    def __init__(
        self, relief_type: str, reason: str, field: str | None = None
    ) -> None:
        self.relief_type = relief_type
        self.reason = reason
        self.field = field
        message = f"{relief_type}: {reason}"
        if field:
            message += f" (field: {field})"
        super().__init__(message)


class UnknownJurisdiction(ClearPathError):
    def __init__(self, jurisdiction_id: str) -> None:
        self.jurisdiction_id = jurisdiction_id
        super().__init__(f"Unsupported jurisdiction: {jurisdiction_id}")


class RuleTableError(ClearPathError):
    """A jurisdiction rule table violates its own referential invariants."""

    def __init__(self, jurisdiction_id: str, problems: list[str]) -> None:
        self.jurisdiction_id = jurisdiction_id
        self.problems = list(problems)
        super().__init__(
            f"Rule table '{jurisdiction_id}' is invalid:\n  "
            + "\n  ".join(self.problems)
        )
