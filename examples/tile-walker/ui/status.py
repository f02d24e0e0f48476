"""Bottom bar: last input feedback above a live walker readout."""
from __future__ import annotations

import pygame

from game.state import GameState
from ui.constants import STATUS_BG, STATUS_H, STATUS_TEXT, WALKER_COLOR, WALKER_IDLE_COLOR


class StatusBar:
    def __init__(self) -> None:
        self._feedback = ""
        self._feedback_color = STATUS_TEXT
        self._font: pygame.font.Font | None = None

    def notify(self, text: str, color: tuple[int, int, int] = STATUS_TEXT) -> None:
        self._feedback = text
        self._feedback_color = color

    def readout(self, state: GameState) -> str:
        walker = state.walker
        cell = state.follower.cell_of(walker)
        ahead = len(state.follower.remaining_path(walker))
        return (
            f"{walker.state.value:<6} cell {cell}  ahead {ahead:>3}  "
            f"arrivals {state.arrivals}  seed {state.seed}"
        )

    def draw(self, surface: pygame.Surface, top: int, state: GameState) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 13)
        width = surface.get_width()
        pygame.draw.rect(surface, STATUS_BG, pygame.Rect(0, top, width, STATUS_H))

        line_h = self._font.get_linesize()
        if self._feedback:
            text = self._font.render(self._feedback, True, self._feedback_color)
            surface.blit(text, (6, top + 3))

        color = WALKER_COLOR if state.walker.moving else WALKER_IDLE_COLOR
        surface.blit(self._font.render(self.readout(state), True, color), (6, top + 3 + line_h))
