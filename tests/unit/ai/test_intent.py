# tests/unit/ai/test_intent.py
# Unit tests for keyword update-intent detection

import pytest

from smartadd.ai.intent import detect_update_intent


@pytest.mark.parametrize(
    "prompt",
    [
        "Update Prof. Sharma's phone number",
        "CHANGE the library timing",
        "library timing 9 am kar do",
        "fees badlo 20000",
        "please correct the course code",
    ],
)
def test_detects_update(prompt):
    assert detect_update_intent(prompt) is True


@pytest.mark.parametrize(
    "prompt",
    [
        "Add Dr. Rajesh Kumar, Professor of Computer Science, PhD",
        "naya course BSc Physics",
        "",
    ],
)
def test_plain_create(prompt):
    assert detect_update_intent(prompt) is False
