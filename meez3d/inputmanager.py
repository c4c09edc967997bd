"""Turns device events into per-frame input snapshots, with record and playback."""

from __future__ import annotations

import enum
import logging
import os
import re
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, Dict, Optional, Tuple, Union

from meez3d.filemanager import FileManager, FileManagerError
from meez3d.geometry import Point
from meez3d.inputstate import (
    AnyOfInput,
    BinaryInput,
    InputState,
    JoystickAxis,
    JoystickButton,
    KeyboardKey,
    MouseButton,
    create_input,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_U64_PATTERN = re.compile(r"\+?[0-9]+\Z")
_U64_MAX = 2**64 - 1
_MOUSE_MASK = 0xFFFF

# Bit positions of the flags that survive encoding.
_BITS = (
    ("ok_clicked", 0),
    ("ok_down", 1),
    ("cancel_clicked", 2),
    ("menu_down_clicked", 8),
    ("menu_up_clicked", 9),
    ("menu_left_clicked", 10),
    ("menu_right_clicked", 11),
    ("mouse_button_left_down", 12),
)


@dataclass(frozen=True)
class InputSnapshot:
    """The logical inputs for one frame."""

    ok_clicked: bool = False
    ok_down: bool = False
    cancel_clicked: bool = False

    player_forward_down: bool = False
    player_backward_down: bool = False
    player_strafe_left_down: bool = False
    player_strafe_right_down: bool = False
    player_turn_left_down: bool = False
    player_turn_right_down: bool = False

    menu_down_clicked: bool = False
    menu_up_clicked: bool = False
    menu_left_clicked: bool = False
    menu_right_clicked: bool = False

    mouse_button_left_down: bool = False

    mouse_position: Point = field(default_factory=Point.zero)

    def encode(self) -> int:
        """Pack the menu flags and mouse position into a 64-bit integer.

        Player movement flags are not encoded.
        """
        result = 0
        for name, bit in _BITS:
            if getattr(self, name):
                result |= 1 << bit
        result |= (int(self.mouse_position.x) & _MOUSE_MASK) << 32
        result |= (int(self.mouse_position.y) & _MOUSE_MASK) << 48
        return result

    @classmethod
    def decode(cls, value: int) -> InputSnapshot:
        flags = {name: bool(value & (1 << bit)) for name, bit in _BITS}
        mouse_x = (value >> 32) & _MOUSE_MASK
        mouse_y = (value >> 48) & _MOUSE_MASK
        return cls(mouse_position=Point(mouse_x, mouse_y), **flags)


def _parse_u64(text: str) -> int:
    if not _U64_PATTERN.match(text):
        raise ValueError(f"invalid unsigned integer: {text!r}")
    value = int(text)
    if value > _U64_MAX:
        raise ValueError(f"unsigned integer out of range: {text!r}")
    return value


class InputRecorder:
    """Stores the frames on which the encoded snapshot changed."""

    def __init__(self) -> None:
        self._previous = 0
        self._queue: Deque[Tuple[int, int]] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def record(self, frame: int, snapshot: InputSnapshot) -> None:
        encoded = snapshot.encode()
        if encoded == self._previous:
            return
        self._previous = encoded
        self._queue.append((frame, encoded))

    def playback(self, frame: int) -> InputSnapshot:
        if self._queue and self._queue[0][0] == frame:
            self._previous = self._queue.popleft()[1]
        return InputSnapshot.decode(self._previous)

    def save(self, path: PathLike) -> None:
        text = "\n".join(f"{frame},{snapshot}" for frame, snapshot in self._queue)
        Path(path).write_text(text, encoding="utf-8")

    def load(self, path: PathLike, files: FileManager) -> None:
        """Replace the recording with the one stored at path."""
        self._previous = 0
        self._queue.clear()

        try:
            text = files.read_to_string(path)
        except FileManagerError as e:
            raise FileManagerError(
                f"unable to load input snapshot record at {str(path)!r}: {e}"
            ) from e

        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            frame_text, comma, snapshot_text = line.partition(",")
            if not comma:
                raise ValueError(f"missing comma: {line!r}")
            self._queue.append((_parse_u64(frame_text), _parse_u64(snapshot_text)))


class RecordMode(enum.Enum):
    NONE = "none"
    RECORD = "record"
    PLAYBACK = "playback"


@dataclass(frozen=True)
class RecordOption:
    """Whether to record input to a file, play it back from one, or neither."""

    mode: RecordMode = RecordMode.NONE
    path: Optional[PathLike] = None

    def __post_init__(self) -> None:
        if self.mode is not RecordMode.NONE and self.path is None:
            raise ValueError(f"{self.mode.name} needs a path")


class GamepadEventType(enum.Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    BUTTON_PRESSED = "button_pressed"
    BUTTON_RELEASED = "button_released"
    AXIS_CHANGED = "axis_changed"


@dataclass(frozen=True)
class GamepadEvent:
    """An event from a gamepad. Axis values are raw stick values."""

    gamepad_id: int
    kind: GamepadEventType
    button: Optional[JoystickButton] = None
    axis: Optional[JoystickAxis] = None
    value: float = 0.0


@dataclass(frozen=True)
class KeyEvent:
    key: Optional[KeyboardKey]
    pressed: bool


@dataclass(frozen=True)
class MouseMoveEvent:
    x: int
    y: int


@dataclass(frozen=True)
class MouseButtonEvent:
    button: MouseButton
    pressed: bool
    position: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


WindowEvent = Union[KeyEvent, MouseMoveEvent, MouseButtonEvent, ResizeEvent]

# Vertical stick axes report up as positive; the game wants up as negative.
_AXIS_POLARITY: Dict[JoystickAxis, float] = {
    JoystickAxis.PRIMARY_VERTICAL: -1.0,
    JoystickAxis.PRIMARY_HORIZONTAL: 1.0,
    JoystickAxis.SECONDARY_VERTICAL: -1.0,
    JoystickAxis.SECONDARY_HORIZONTAL: 1.0,
}


class InputManager:
    """Collects device events and produces an InputSnapshot each frame."""

    def __init__(
        self,
        window_width: int,
        window_height: int,
        adjust_mouse_position: bool = False,
        record_option: Optional[RecordOption] = None,
        files: Optional[FileManager] = None,
    ) -> None:
        self._record_option = record_option or RecordOption()
        self._recorder = InputRecorder()
        if self._record_option.mode is RecordMode.PLAYBACK:
            self._recorder.load(
                self._record_option.path, files or FileManager.from_fs()
            )

        self._state = InputState(window_width, window_height, adjust_mouse_position)
        self._hooks: Dict[BinaryInput, AnyOfInput] = {
            hook: create_input(hook) for hook in BinaryInput
        }
        self._previous_snapshot: Optional[InputSnapshot] = None
        self.current_gamepad: Optional[int] = None
        self._closed = False

    def update(self, frame: int) -> InputSnapshot:
        """Compute the snapshot for the given frame."""
        if self._record_option.mode is RecordMode.PLAYBACK:
            return self._recorder.playback(frame)

        for hook in self._hooks.values():
            hook.update(self._state)

        on = {hook: inputs.is_on() for hook, inputs in self._hooks.items()}
        B = BinaryInput
        snapshot = InputSnapshot(
            ok_clicked=on[B.OK_TRIGGER],
            ok_down=on[B.OK_DOWN],
            cancel_clicked=on[B.CANCEL],
            player_forward_down=on[B.PLAYER_MOVE_FORWARD],
            player_backward_down=on[B.PLAYER_MOVE_BACKWARD],
            player_strafe_left_down=on[B.PLAYER_STRAFE_LEFT],
            player_strafe_right_down=on[B.PLAYER_STRAFE_RIGHT],
            player_turn_left_down=on[B.PLAYER_TURN_LEFT],
            player_turn_right_down=on[B.PLAYER_TURN_RIGHT],
            menu_down_clicked=on[B.MENU_DOWN],
            menu_up_clicked=on[B.MENU_UP],
            menu_left_clicked=on[B.MENU_LEFT],
            menu_right_clicked=on[B.MENU_RIGHT],
            mouse_button_left_down=on[B.MOUSE_BUTTON_LEFT],
            mouse_position=self._state.mouse_position,
        )
        if snapshot != self._previous_snapshot:
            logger.debug("%r", snapshot)
            self._previous_snapshot = snapshot

        if self._record_option.mode is RecordMode.RECORD:
            self._recorder.record(frame, snapshot)

        return snapshot

    def handle_gamepad_event(self, event: GamepadEvent) -> None:
        logger.debug("Gamepad event from %s: %r", event.gamepad_id, event.kind)
        kind = event.kind
        if kind is GamepadEventType.CONNECTED:
            if self.current_gamepad is None:
                logger.info("Using new gamepad %s", event.gamepad_id)
                self.current_gamepad = event.gamepad_id
        elif kind is GamepadEventType.DISCONNECTED:
            if self.current_gamepad == event.gamepad_id:
                logger.info("Lost gamepad %s", event.gamepad_id)
                self.current_gamepad = None
        elif kind is GamepadEventType.BUTTON_PRESSED:
            if event.button is not None:
                self._state.set_joystick_button_down(event.button)
        elif kind is GamepadEventType.BUTTON_RELEASED:
            if event.button is not None:
                self._state.set_joystick_button_up(event.button)
        elif kind is GamepadEventType.AXIS_CHANGED:
            if event.axis is not None:
                polarity = _AXIS_POLARITY[event.axis]
                self._state.set_joy_axis(event.axis, event.value * polarity)

    def handle_window_event(self, event: WindowEvent) -> None:
        if isinstance(event, ResizeEvent):
            logger.info("window resized to %s, %s", event.width, event.height)
            self._state.set_window_size(event.width, event.height)
        elif isinstance(event, KeyEvent):
            if event.key is None:
                return
            if event.pressed:
                self._state.set_key_down(event.key)
            else:
                self._state.set_key_up(event.key)
        elif isinstance(event, MouseMoveEvent):
            self._state.set_mouse_position(event.x, event.y)
        elif isinstance(event, MouseButtonEvent):
            if event.position is not None:
                self._state.set_mouse_position(*event.position)
            if event.pressed:
                self._state.set_mouse_button_down(event.button)
            else:
                self._state.set_mouse_button_up(event.button)

    def close(self) -> None:
        """Write out the recording, if recording. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._record_option.mode is RecordMode.RECORD:
            path = self._record_option.path
            try:
                self._recorder.save(path)
                logger.info("wrote input snapshot to %s", path)
            except OSError as e:
                logger.error("unable to write input snapshot to %s: %s", path, e)

    def __enter__(self) -> InputManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()