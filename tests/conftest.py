from datetime import datetime, timezone

import pytest

FIXED_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_time():
    return FIXED_TIME


@pytest.fixture
def transcript():
    return [
        {"role": "assistant", "content": "Namaste! Ask me about yoga or tea."},
        {"role": "user", "content": "What is yoga?"},
        {"role": "assistant", "content": "Yoga is a practice joining breath, movement and attention."},
        {"role": "user", "content": "Tell me about tea"},
        {"role": "user", "content": "Tell me about masala tea please"},
        {"role": "assistant", "content": "Masala tea is black tea brewed with milk and spices."},
    ]
