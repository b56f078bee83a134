"""Plan Generation Observability.

Every terminal failure is logged once, at the point where it becomes a failed
PlanResult. Repair attempts that fail inside the chain are not failures and
are logged by the chain at debug level only.
"""

from loguru import logger

from mealgen.planning.errors import PlanGenerationError, StructuralValidationError


def log_plan_generation_failure(err: PlanGenerationError, context: dict[str, str | int | float | bool | None]) -> None:
    """Log a plan generation failure with request context.

    Args:
        err: The PlanGenerationError about to be returned to the caller
        context: Request context (requested_days, response_chars, ...)
    """
    fields = {
        "code": err.code,
        "details": err.details,
        "user_action": err.user_action,
        **context,
    }
    if isinstance(err, StructuralValidationError):
        fields["missing_field"] = err.missing_field

    # Transport failures are retryable; response failures mean the model output was unusable
    log = logger.warning if err.user_action == "retry" else logger.error
    log("PLAN_GENERATION_FAILED", **fields)
