"""Result Assembler - pipeline entry point.

Flow (strictly left to right, no shared state):
    prompt -> model call -> extract span -> strict parse
        -> repair chain (only on parse failure) -> structural validation
        -> content check -> extension to the requested day count -> PlanResult

Only the terminal outcome crosses this boundary: a GeneratedPlan with exactly
requested_duration_days days, or one of the four PlanGenerationError kinds.
Whether repair was needed is invisible to the caller.
"""

from dataclasses import dataclass

from loguru import logger

from mealgen.planning.errors import PlanGenerationError, TransportError
from mealgen.planning.extender import extend_plan
from mealgen.planning.llm.prompts import build_meal_plan_prompt
from mealgen.planning.logging import log_plan_generation_failure
from mealgen.planning.parsing.extractor import extract_document_span
from mealgen.planning.parsing.strict import strict_parse
from mealgen.planning.repair.chain import run_repair_chain
from mealgen.planning.safety import check_response_content, contains_malicious_content
from mealgen.planning.schema.meal_plan import GeneratedPlan, average_day_totals
from mealgen.planning.schema.plan_request import PlanRequest
from mealgen.planning.validate_plan import validate_plan_structure
from mealgen.services.llm.client import ModelClient


@dataclass(frozen=True)
class PlanResult:
    """Tagged result: exactly one of plan or error is set.

    Attributes:
        plan: Generated plan on success
        error: Terminal failure otherwise
    """

    plan: GeneratedPlan | None = None
    error: PlanGenerationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> GeneratedPlan:
        """Return the plan, or raise the failure."""
        if self.error is not None:
            raise self.error
        if self.plan is None:
            raise RuntimeError("PlanResult holds neither a plan nor an error")
        return self.plan


def _fit_to_length(plan: GeneratedPlan, target_days: int) -> GeneratedPlan:
    if len(plan.days) == target_days:
        return plan.model_copy(update={"requested_duration_days": target_days})

    logger.warning(
        "assemble_plan: Model returned more days than requested, trimming",
        returned_days=len(plan.days),
        target_days=target_days,
    )
    days = plan.days[:target_days]
    return plan.model_copy(
        update={
            "days": days,
            "requested_duration_days": target_days,
            "nutrition_summary": average_day_totals(days),
        }
    )


def parse_plan_document(raw_text: str, request: PlanRequest) -> GeneratedPlan:
    """Recover a validated (possibly short) plan from raw model text.

    Args:
        raw_text: Raw model response
        request: The request the response answers

    Returns:
        Validated plan, not yet extended

    Raises:
        EmptyOrNonStructuredResponseError: No document span in the text
        UnrecoverableMalformedResponseError: Nothing parseable could be recovered
        StructuralValidationError: Parsed, but a required field is missing
        SuspiciousResponseError: The plan carries non meal-plan content
    """
    span = extract_document_span(raw_text)

    outcome = strict_parse(span)
    if outcome.ok:
        value = outcome.value
    else:
        logger.info(
            "assemble_plan: Strict parse failed, running repair chain",
            parse_error=outcome.error.message,
            offset=outcome.error.offset,
            span_chars=len(span),
        )
        value = run_repair_chain(span).produced_value

    plan = validate_plan_structure(value, request.requested_duration_days, request.start_date)
    check_response_content(plan)
    return plan


def assemble_plan(raw_text: str, request: PlanRequest) -> PlanResult:
    """Run the pure recovery pipeline on model text.

    Args:
        raw_text: Raw model response
        request: The request the response answers

    Returns:
        PlanResult with a plan of exactly request.requested_duration_days
        days, or with the terminal error
    """
    target_days = request.requested_duration_days
    try:
        plan = parse_plan_document(raw_text, request)
    except PlanGenerationError as err:
        log_plan_generation_failure(
            err,
            {
                "requested_days": target_days,
                "response_chars": len(raw_text),
            },
        )
        return PlanResult(error=err)

    plan = _fit_to_length(extend_plan(plan, target_days), target_days)

    logger.info(
        "assemble_plan: Plan assembled",
        plan_name=plan.name,
        days=len(plan.days),
        approximate=plan.is_approximate,
    )
    return PlanResult(plan=plan)


class MealPlanGenerator:
    """Generation entry point used by collaborators.

    The model client is injected so callers and tests decide how the model
    is reached.
    """

    def __init__(self, client: ModelClient):
        self._client = client

    async def generate(self, request: PlanRequest) -> PlanResult:
        """Generate a meal plan for a request.

        Args:
            request: Plan request

        Returns:
            PlanResult; transport failures are returned, never raised
        """
        if request.render_prompt and contains_malicious_content(request.prompt_text):
            logger.warning(
                "generate: Prompt injection patterns filtered from brief",
                prompt_chars=len(request.prompt_text),
            )

        prompt = build_meal_plan_prompt(request)

        logger.debug(
            "generate: Requesting meal plan",
            requested_days=request.requested_duration_days,
            target_calories=request.target_calories_per_day,
            prompt_chars=len(prompt),
        )

        try:
            raw_text = await self._client.send_prompt(prompt)
        except TransportError as err:
            log_plan_generation_failure(err, {"requested_days": request.requested_duration_days})
            return PlanResult(error=err)

        return assemble_plan(raw_text, request)
