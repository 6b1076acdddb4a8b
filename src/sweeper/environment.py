"""
Gymnasium environment wrapper for Minesweeper.

Plays the keyboard game through discrete key actions, so scripted or
learning agents drive exactly the same game loop a human does.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, GameState
from .game_loop import GameLoop, Key, KeyBindings, KeyPress
from .render import render_lines


# ============================================================================
# Constants
# ============================================================================

ACTION_NAMES = ("up", "down", "left", "right", "flag", "reveal", "quit")

WIN_REWARD = 10.0
LOSE_REWARD = -10.0
NOOP_PENALTY = -0.1


# ============================================================================
# Keyboard Environment
# ============================================================================

class KeyboardEnv(gym.Env):
    """
    Gymnasium environment for the cursor-driven game.

    Observation:
        Dict with:
        - "board": (height, width) int8 array, -1 hidden, -2 flagged,
          0-8 open count, 9 open mine
        - "cursor": [x, y]

    Actions:
        0 up, 1 down, 2 left, 3 right, 4 flag, 5 reveal, 6 quit.

    Rewards:
        - +1 per tile opened
        - +10 for winning, -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 16x16 with 32 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.bindings = KeyBindings()
        self.loop = GameLoop(Board(self.config), self.bindings)

        self.observation_space = spaces.Dict({
            "board": spaces.Box(
                low=-2,
                high=9,
                shape=(self.config.height, self.config.width),
                dtype=np.int8,
            ),
            "cursor": spaces.MultiDiscrete(
                [self.config.width, self.config.height]
            ),
        })
        self.action_space = spaces.Discrete(len(ACTION_NAMES))

        self._keys = (
            KeyPress(Key.UP),
            KeyPress(Key.DOWN),
            KeyPress(Key.LEFT),
            KeyPress(Key.RIGHT),
            KeyPress.of(self.bindings.flag),
            KeyPress.of(self.bindings.reveal),
            KeyPress.of(self.bindings.quit),
        )
        self._steps = 0

    @property
    def board(self) -> Board:
        return self.loop.board

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a new game on a freshly mined board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2 ** 32)))
        self.loop = GameLoop(Board(self.config, rng=rng), self.bindings)
        self._steps = 0
        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[Dict[str, np.ndarray], SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Press one key.

        Args:
            action: Index into ``ACTION_NAMES``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        before = self.board.get_observation()
        cursor_before = self.board.cursor

        state = self.loop.handle(self._keys[action])
        after = self.board.get_observation()

        reward = self._calculate_reward(state, before, after, cursor_before)
        terminated = state.is_terminal

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _calculate_reward(
        self,
        state: GameState,
        before: np.ndarray,
        after: np.ndarray,
        cursor_before: Tuple[int, int],
    ) -> float:
        """Reward for the change one key press made."""
        if state is GameState.LOSE:
            return LOSE_REWARD
        if state is GameState.QUIT:
            return 0.0
        opened = int(np.count_nonzero((before < 0) & (after >= 0)))
        if state is GameState.WIN:
            return WIN_REWARD + opened
        if opened:
            return float(opened)
        if np.array_equal(before, after) and cursor_before == self.board.cursor:
            return NOOP_PENALTY
        return 0.0

    def _get_observation(self) -> Dict[str, np.ndarray]:
        return {
            "board": self.board.get_observation(),
            "cursor": np.array(self.board.cursor, dtype=np.int64),
        }

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "game_state": self.loop.state.name,
            "flags": self.board.flag_count,
            "remaining": self.board.remaining,
        }

    def render(self) -> Optional[str]:
        """Render the current frame."""
        text = "\n".join(render_lines(self.board))
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can still change the game.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.ones(self.action_space.n, dtype=bool)
        if self.loop.state.is_terminal:
            mask[:] = False
            return mask
        tile = self.board.get_tile(*self.board.cursor)
        mask[ACTION_NAMES.index("flag")] = not tile.is_open
        mask[ACTION_NAMES.index("reveal")] = tile.is_hidden
        return mask
