"""Geometry lifecycle - Per-level-load state of a LevelGeometry.

Uses python-statemachine so the only legal sequence is explicit:

States:
    EMPTY: No geometry (initial, and after teardown)
    GENERATED: Geometry built for exactly one level, queries answer from it

Transitions:
    EMPTY -> GENERATED: build (generate for a level)
    GENERATED -> GENERATED: build (regenerate for the next level, collections cleared first)
    EMPTY|GENERATED -> EMPTY: teardown (reset)
"""

import logging

from statemachine import State, StateMachine

logger = logging.getLogger(__name__)


class GeometryLifecycle(StateMachine):
    """Level-load lifecycle of one LevelGeometry instance."""

    empty = State("Empty", initial=True)
    generated = State("Generated")

    build = empty.to(generated) | generated.to(generated)
    teardown = empty.to(empty) | generated.to(empty)

    @property
    def is_empty(self) -> bool:
        return self.empty.is_active

    @property
    def is_generated(self) -> bool:
        return self.generated.is_active

    def on_enter_generated(self) -> None:
        logger.debug("Geometry lifecycle: generated")

    def on_enter_empty(self) -> None:
        logger.debug("Geometry lifecycle: empty")

    def get_state_name(self) -> str:
        return self.current_state.name
