"""Acquisition strategies, in the order the runner tries them."""

from transcript_grabber.acquisition.strategies import (
    panel_automator,
    player_response,
    rendered_panel,
    timedtext_api,
)
from transcript_grabber.acquisition.strategies.base import AcquisitionContext, Strategy

DEFAULT_STRATEGIES = (
    Strategy(rendered_panel.STRATEGY_NAME, rendered_panel.attempt),
    Strategy(panel_automator.STRATEGY_NAME, panel_automator.attempt),
    Strategy(player_response.STRATEGY_NAME, player_response.attempt),
    Strategy(timedtext_api.STRATEGY_NAME, timedtext_api.attempt),
)

__all__ = ["AcquisitionContext", "DEFAULT_STRATEGIES", "Strategy"]
