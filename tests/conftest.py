"""Shared fixtures for the id3tree test suite."""

from __future__ import annotations

import pytest

from id3tree.dataset import Dataset

VEGETATION_COLUMNS: dict[str, list[int] | list[bool] | list[str]] = {
    "id": [1, 2, 3, 4, 5, 6, 7],
    "stream": [False, True, True, False, False, True, True],
    "slope": ["steep", "moderate", "steep", "steep", "flat", "steep", "steep"],
    "elevation": ["high", "low", "medium", "medium", "high", "highest", "high"],
    "vegetation": ["chapparal", "riparian", "riparian", "chapparal", "conifer", "conifer", "chapparal"],
}


@pytest.fixture
def vegetation() -> Dataset:
    """Seven survey sites labeled by vegetation type, with a site identifier.

    Returns:
        Dataset: Target `vegetation`, identifier `id`, features `stream`,
            `slope`, and `elevation`.
    """
    return Dataset.from_columns(VEGETATION_COLUMNS, target="vegetation", identifier="id")


@pytest.fixture
def play_tennis() -> Dataset:
    """Quinlan's fourteen-day play-tennis table.

    Returns:
        Dataset: Target `play`, identifier `day`, four categorical features.
    """
    return Dataset.from_columns(
        {
            "day": list(range(1, 15)),
            "outlook": [
                "sunny",
                "sunny",
                "overcast",
                "rain",
                "rain",
                "rain",
                "overcast",
                "sunny",
                "sunny",
                "rain",
                "sunny",
                "overcast",
                "overcast",
                "rain",
            ],
            "temperature": [
                "hot",
                "hot",
                "hot",
                "mild",
                "cool",
                "cool",
                "cool",
                "mild",
                "cool",
                "mild",
                "mild",
                "mild",
                "hot",
                "mild",
            ],
            "humidity": [
                "high",
                "high",
                "high",
                "high",
                "normal",
                "normal",
                "normal",
                "high",
                "normal",
                "normal",
                "normal",
                "high",
                "normal",
                "high",
            ],
            "windy": [False, True, False, False, False, True, True, False, False, False, True, True, False, True],
            "play": ["no", "no", "yes", "yes", "yes", "no", "yes", "no", "yes", "yes", "yes", "yes", "yes", "no"],
        },
        target="play",
        identifier="day",
    )
