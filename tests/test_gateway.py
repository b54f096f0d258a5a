import pytest

from authorcheck.core.errors import InvalidInput, ServiceUnavailable
from authorcheck.services.gateway import AnalysisGateway, clamp_timeout, validate_text
from conftest import make_settings


class RecordingClient:
    def __init__(self, reply: str = '{"topics": []}') -> None:
        self.reply = reply
        self.calls = []

    async def generate(self, prompt: str, *, timeout_seconds: float) -> str:
        self.calls.append((prompt, timeout_seconds))
        return self.reply


@pytest.mark.parametrize("value", [None, "", 42, ["text"], {"text": "x"}])
def test_validate_text_rejects_non_strings(value):
    with pytest.raises(InvalidInput) as exc:
        validate_text(value, 10_000)
    assert exc.value.details == "Invalid text input"


def test_validate_text_length_limit():
    assert validate_text("a" * 10_000, 10_000) == "a" * 10_000

    with pytest.raises(InvalidInput) as exc:
        validate_text("a" * 10_001, 10_000)
    assert exc.value.details == "Text too long. Maximum 10000 characters allowed"


def test_validate_text_strips_control_characters():
    assert validate_text("  Hello\x00 wor\x07ld\x7f \n", 100) == "Hello world"


def test_validate_text_keeps_newlines_and_tabs():
    assert validate_text("one\n\ntwo\tthree", 100) == "one\n\ntwo\tthree"


@pytest.mark.parametrize("value", ["   ", "\x00\x01\x02", " \x1f\n "])
def test_validate_text_empty_after_sanitization(value):
    with pytest.raises(InvalidInput) as exc:
        validate_text(value, 100)
    assert exc.value.details == "Text cannot be empty after sanitization"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 30_000),
        (1_000, 5_000),
        (5_000, 5_000),
        (12_345.6, 12_345),
        (60_000, 60_000),
        (120_000, 60_000),
        (-1, 5_000),
        ("20000", 30_000),
        (True, 30_000),
        (float("nan"), 30_000),
    ],
)
def test_clamp_timeout(value, expected):
    assert clamp_timeout(value, 30_000) == expected


@pytest.mark.asyncio
async def test_analyze_builds_prompt_from_sanitized_text():
    client = RecordingClient('Result: {"topics": [], "aiOrHuman": "ai"} done')
    gateway = AnalysisGateway(make_settings(), client)

    data = await gateway.analyze("  A short\x00 essay. ", 2_000)

    assert data == {"topics": [], "aiOrHuman": "ai"}
    prompt, timeout_seconds = client.calls[0]
    assert '"A short essay."' in prompt
    assert timeout_seconds == 5.0


@pytest.mark.asyncio
async def test_analyze_uses_configured_timeout_by_default():
    client = RecordingClient()
    gateway = AnalysisGateway(make_settings(AI_TIMEOUT=45_000), client)

    await gateway.analyze("Some text.")

    assert client.calls[0][1] == 45.0


@pytest.mark.asyncio
async def test_analyze_without_api_key():
    client = RecordingClient()
    gateway = AnalysisGateway(make_settings(API_KEY=""), client)

    with pytest.raises(ServiceUnavailable) as exc:
        await gateway.analyze("Some text.")

    assert exc.value.status_code == 500
    assert exc.value.error == "Service temporarily unavailable"
    assert client.calls == []


@pytest.mark.asyncio
async def test_analyze_validates_before_checking_key():
    gateway = AnalysisGateway(make_settings(API_KEY=""), RecordingClient())

    with pytest.raises(InvalidInput):
        await gateway.analyze("")


def test_model_name_comes_from_settings():
    gateway = AnalysisGateway(make_settings(MODEL="gemini-test"), RecordingClient())
    assert gateway.model == "gemini-test"
