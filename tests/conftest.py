"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from obs_deck_button.deck import DeckClient
from obs_deck_button.obs import ObsClient, OutputStatus
from obs_deck_button.settings import Config, KindSettings
from obs_deck_button.status import ButtonTarget


@pytest.fixture
def config():
    return Config(
        recording=KindSettings(
            on_icon="/icons/rec-on.png",
            off_icon="/icons/rec-off.png",
            error_icon="/icons/rec-error.png",
            target=ButtonTarget(button=9),
        ),
        streaming=KindSettings(
            on_icon="/icons/stream-on.png",
            off_icon="/icons/stream-off.png",
            target=ButtonTarget(button=10, page=2),
        ),
        error_icon="/icons/error.png",
    )


@pytest.fixture
def deck():
    return MagicMock(spec=DeckClient)


@pytest.fixture
def obs():
    client = MagicMock(spec=ObsClient)
    client.status.return_value = OutputStatus(active=False, timecode="00:00:00.000")
    return client
