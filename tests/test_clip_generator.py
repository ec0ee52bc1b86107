import asyncio
from unittest.mock import patch, AsyncMock
from app.services.clip_generator import PlaceholderClipGenerator, PLACEHOLDER_CLIPS

def test_placeholder_returns_fixed_clips():
    generator = PlaceholderClipGenerator(delay_seconds=0)

    first = asyncio.run(generator.generate("https://x/a.mp4", "make shorts", "upbeat", "narrator"))
    second = asyncio.run(generator.generate("https://x/b.mp4", "something else", "none", "none"))

    assert len(first) == 3
    assert first == second == PLACEHOLDER_CLIPS

def test_placeholder_returns_copies():
    generator = PlaceholderClipGenerator(delay_seconds=0)

    clips = asyncio.run(generator.generate("https://x/a.mp4", "make shorts", "none", "none"))
    clips[0].title = "changed"

    assert PLACEHOLDER_CLIPS[0].title == "Build Flappy Bird using Scratch AI"

def test_placeholder_waits_for_delay():
    generator = PlaceholderClipGenerator(delay_seconds=2)

    with patch("app.services.clip_generator.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        asyncio.run(generator.generate("https://x/a.mp4", "make shorts", "none", "none"))

    mock_sleep.assert_awaited_once_with(2)

def test_default_delay_is_two_seconds():
    assert PlaceholderClipGenerator().delay_seconds == 2
