from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class PlanRequest(BaseModel):
    """One generation attempt. Read-only once constructed."""

    model_config = ConfigDict(frozen=True)

    prompt_text: str = Field("", description="Free-text brief, or the full prompt when render_prompt is False")
    requested_duration_days: int = Field(..., gt=0)
    target_calories_per_day: int | None = Field(None, gt=0)
    diet_style: str | None = None
    restrictions: frozenset[str] = frozenset()

    start_date: date = Field(default_factory=date.today)
    render_prompt: bool = True
