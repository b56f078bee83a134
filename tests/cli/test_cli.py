"""Tests for the mealgen CLI commands."""

import json

import pytest
from loguru import logger
from typer.testing import CliRunner

from cli.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    logger.remove()


def test_prompt_command_prints_bounded_prompt():
    result = runner.invoke(app, ["prompt", "--days", "7", "--calories", "1800", "--restriction", "nuts"])

    assert result.exit_code == 0
    assert "Generate a meal plan in JSON for 3 days." in result.output
    assert "Restrictions: nuts" in result.output


def test_repair_command_writes_plan(tmp_path, make_plan_json):
    response_file = tmp_path / "response.txt"
    text = make_plan_json(3)
    response_file.write_text("```json\n" + text[: text.rfind("200g vegetables") + 4], encoding="utf-8")
    output_file = tmp_path / "plan.json"

    result = runner.invoke(
        app,
        ["repair", str(response_file), "--days", "5", "--start", "2025-03-03", "--output", str(output_file)],
    )

    assert result.exit_code == 0
    document = json.loads(output_file.read_text(encoding="utf-8"))
    assert len(document["days"]) == 5
    assert document["days"][0]["date"] == "2025-03-03"


def test_repair_command_fails_on_prose(tmp_path):
    response_file = tmp_path / "response.txt"
    response_file.write_text("No plan today, sorry.", encoding="utf-8")

    result = runner.invoke(app, ["repair", str(response_file)])

    assert result.exit_code == 1
    assert "EMPTY_OR_NON_STRUCTURED_RESPONSE" in result.output


def test_repair_command_prints_daily_target(tmp_path, make_plan_json):
    response_file = tmp_path / "response.txt"
    response_file.write_text(make_plan_json(2), encoding="utf-8")

    result = runner.invoke(app, ["repair", str(response_file), "--days", "2", "--output", str(tmp_path / "plan.json")])

    assert result.exit_code == 0
    assert "Daily target: 2000 kcal (protein 25%, carbs 45%, fat 30%)" in result.output
