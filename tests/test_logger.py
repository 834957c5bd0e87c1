"""
Tests for the structured logger.
"""

import json
import logging

from app.utils.logger import get_logger


def test_render_emits_json_with_fields():
    logger = get_logger("tests.render")
    record = json.loads(logger.render(logging.INFO, "Task created", user_id=3, task_id=9))
    assert record["message"] == "Task created"
    assert record["level"] == "INFO"
    assert record["service"] == "tests.render"
    assert record["user_id"] == 3
    assert record["task_id"] == 9


def test_handler_attached_once():
    first = get_logger("tests.once")
    get_logger("tests.once")
    assert len(first.logger.handlers) == 1
