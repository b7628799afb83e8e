"""Card counting systems."""

from blackjack_core.counting.base import CountingSystem, true_count
from blackjack_core.counting.hilo import (
    HiLoSystem,
    hilo_value,
    update_running_count,
    update_running_count_for_cards,
)

__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "hilo_value",
    "true_count",
    "update_running_count",
    "update_running_count_for_cards",
]
