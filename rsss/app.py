"""The terminal program loop that drives the interface model."""

from __future__ import annotations

import queue
import threading
from typing import Any, Optional

from blessed import Terminal

from .commands import Cmd
from .messages import BatchMsg, KeyMsg, QuitMsg, WindowSizeMsg
from .model import Model
from .view import render

_POLL_SECONDS = 0.1

_SEQUENCE_KEYS = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_TAB": "tab",
    "KEY_PGUP": "pgup",
    "KEY_PGDOWN": "pgdown",
    "KEY_HOME": "home",
    "KEY_END": "end",
}

_CHARACTER_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\t": "tab",
}


def _key_name(keystroke: Any) -> str:
    """Name a keystroke the way the model expects, e.g. ``"up"`` or ``"ctrl+c"``."""
    if keystroke.is_sequence and keystroke.name:
        name = keystroke.name
        if name in _SEQUENCE_KEYS:
            return _SEQUENCE_KEYS[name]
        return name.removeprefix("KEY_").lower()
    text = str(keystroke)
    if text in _CHARACTER_KEYS:
        return _CHARACTER_KEYS[text]
    if len(text) == 1 and 1 <= ord(text) <= 26:
        return "ctrl+" + chr(ord(text) + ord("a") - 1)
    return text


class Program:
    """Runs a model in the terminal: draws it, feeds it keys and command results."""

    def __init__(self, model: Model, terminal: Optional[Terminal] = None) -> None:
        self.model = model
        self.terminal = terminal if terminal is not None else Terminal()
        self.running = True
        self._messages: queue.Queue[Any] = queue.Queue()
        self._size: Optional[tuple[int, int]] = None
        self._last_frame: Optional[str] = None

    def _execute(self, cmd: Cmd) -> None:
        msg = cmd()
        if msg is not None:
            self._messages.put(msg)

    def _start(self, cmd: Optional[Cmd]) -> None:
        if cmd is None:
            return
        threading.Thread(target=self._execute, args=(cmd,), daemon=True).start()

    def dispatch(self, msg: object) -> None:
        """Deliver one message to the model and start whatever command it returns."""
        if isinstance(msg, QuitMsg):
            self.running = False
            return
        if isinstance(msg, BatchMsg):
            for cmd in msg.cmds:
                self._start(cmd)
            return
        self._start(self.model.update(msg))

    def _drain(self) -> None:
        while self.running:
            try:
                msg = self._messages.get_nowait()
            except queue.Empty:
                return
            self.dispatch(msg)

    def _check_size(self) -> None:
        size = (self.terminal.width, self.terminal.height)
        if size != self._size:
            self._size = size
            self.dispatch(WindowSizeMsg(width=size[0], height=size[1]))

    def _draw(self) -> None:
        frame = render(self.model)
        if frame == self._last_frame:
            return
        self._last_frame = frame
        stream = self.terminal.stream
        stream.write(self.terminal.home + self.terminal.clear + frame.replace("\n", "\r\n"))
        stream.flush()

    def run(self) -> Model:
        """Run until the model asks to quit; return the model."""
        term = self.terminal
        self.running = True
        with term.fullscreen(), term.raw(), term.hidden_cursor():
            self._check_size()
            self._start(self.model.init())
            while self.running:
                self._drain()
                if not self.running:
                    break
                self._draw()
                keystroke = term.inkey(timeout=_POLL_SECONDS)
                if keystroke:
                    self.dispatch(KeyMsg(_key_name(keystroke)))
                self._check_size()
        return self.model