from __future__ import annotations

import itertools

import pytest

from lib_log_channels.domain.levels import Level


@pytest.mark.parametrize(
    "text, expected",
    [
        ("debug", Level.DEBUG),
        ("INFO", Level.INFO),
        ("Notice", Level.NOTICE),
        ("warning", Level.WARNING),
        ("WARN", Level.WARNING),
        ("error", Level.ERROR),
        ("err", Level.ERROR),
        ("critical", Level.CRITICAL),
        ("crit", Level.CRITICAL),
        ("alert", Level.ALERT),
        ("EMERGENCY", Level.EMERGENCY),
        ("emerg", Level.EMERGENCY),
        ("  eRrOr  ", Level.ERROR),
    ],
)
def test_parse_accepts_names_and_aliases_in_any_case(text: str, expected: Level) -> None:
    assert Level.parse(text) is expected


@pytest.mark.parametrize("text", ["", "   ", "verbose", "trace", "fatal", "warnings", None])
def test_parse_falls_back_to_info_for_unknown_text(text: str | None) -> None:
    assert Level.parse(text) is Level.INFO


def test_levels_are_totally_ordered() -> None:
    ordered = list(Level)
    assert ordered == sorted(ordered)
    for low, high in itertools.combinations(ordered, 2):
        assert low < high
        assert high > low
        assert low <= high
        assert not high <= low


def test_comparison_with_foreign_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        Level.INFO < 3  # noqa: B015


def test_coerce_passes_levels_through_and_parses_text() -> None:
    assert Level.coerce(Level.ALERT) is Level.ALERT
    assert Level.coerce("notice") is Level.NOTICE
    assert Level.coerce(None) is Level.INFO


@pytest.mark.parametrize("level", list(Level))
def test_every_level_carries_presentation_metadata(level: Level) -> None:
    assert level.icon
    assert level.ansi_color.startswith("\033[")
    assert level.webhook_color.startswith("#")
    assert level.severity == level.name.lower()


def test_webhook_colours_match_palette() -> None:
    assert Level.DEBUG.webhook_color == "#36a64f"
    assert Level.ERROR.webhook_color == "#f44336"
    assert Level.EMERGENCY.webhook_color == "#000000"
