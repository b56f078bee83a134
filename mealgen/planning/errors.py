"""Canonical Plan Generation Error Types.

Every terminal failure of the generation pipeline is one of these types.
Repair failures inside the chain are NOT errors - strategies report them as
RepairAttempt values. Only the outcomes below cross the pipeline boundary.

Standard error codes:
- TRANSPORT_ERROR: The model call itself failed (network, timeout, provider)
- EMPTY_OR_NON_STRUCTURED_RESPONSE: No candidate document span in the response
- UNRECOVERABLE_MALFORMED_RESPONSE: Every repair strategy failed
  (SUSPICIOUS_RESPONSE_CONTENT narrows it: the plan parsed but is not meal-plan text)
- STRUCTURAL_VALIDATION_ERROR: Parsed, but a required field is missing
"""


class PlanGenerationError(RuntimeError):
    """Base class for terminal plan generation failures.

    Attributes:
        code: Error code (e.g., "TRANSPORT_ERROR", "STRUCTURAL_VALIDATION_ERROR")
        details: List of error detail strings
        user_action: What the caller should offer the user ("retry" or "regenerate")
    """

    code = "PLAN_GENERATION_ERROR"
    user_action = "regenerate"

    def __init__(self, details: list[str]):
        self.details = details
        super().__init__(f"{self.code}: {details}")


class TransportError(PlanGenerationError):
    """Raised when the model call fails before any text is returned."""

    code = "TRANSPORT_ERROR"
    user_action = "retry"


class EmptyOrNonStructuredResponseError(PlanGenerationError):
    """Raised when the response holds no '{' to start a document from."""

    code = "EMPTY_OR_NON_STRUCTURED_RESPONSE"


class UnrecoverableMalformedResponseError(PlanGenerationError):
    """Raised when strict parsing and every repair strategy failed."""

    code = "UNRECOVERABLE_MALFORMED_RESPONSE"


class SuspiciousResponseError(UnrecoverableMalformedResponseError):
    """Raised when a parsed plan carries content that is not meal-plan text.

    A kind of unrecoverable response: the caller regenerates it the same way.

    Attributes:
        reason: Which suspicious pattern matched (e.g., "system prompt")
    """

    code = "SUSPICIOUS_RESPONSE_CONTENT"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__([f"Suspicious content in response: {reason}"])


class StructuralValidationError(PlanGenerationError):
    """Raised when a parsed document lacks a required field.

    Attributes:
        missing_field: Path of the first missing field (e.g., "days[1].meals.dinner")
    """

    code = "STRUCTURAL_VALIDATION_ERROR"

    def __init__(self, missing_field: str):
        self.missing_field = missing_field
        super().__init__([f"Missing required field: {missing_field}"])
