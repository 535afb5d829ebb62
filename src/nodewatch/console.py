"""Console input helper with readline history and command completion.

Enables arrow-key editing, persistent history and tab completion of
`command sub-command` phrases for the REPL. Everything degrades to plain
`input()` when readline is unavailable.
"""
from __future__ import annotations

import atexit
import os
from typing import Iterable, List, Optional


HISTORY_FILE = os.path.expanduser("~/.nodewatch_history")
_readline = None  # type: ignore


def _ensure_history_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def make_completer(words: Iterable[str]):
    """Build a readline completer over whole command phrases.

    The completer matches against the full line buffer so that `network s`
    completes to `network status`, but only returns the word being typed.
    """
    phrases: List[str] = sorted(set(words))

    def complete(text: str, state: int) -> Optional[str]:
        line = _readline.get_line_buffer() if _readline is not None else text
        head = line[: len(line) - len(text)]
        matches = [p[len(head):] for p in phrases if p.startswith(line) and p.startswith(head)]
        # Only offer the next word, not the rest of the phrase.
        matches = sorted({m.split(" ", 1)[0] for m in matches})
        return matches[state] if state < len(matches) else None

    return complete


def init_readline(history_file: Optional[str] = None, history_length: int = 1000,
                  words: Optional[Iterable[str]] = None) -> None:
    """Initialize readline: history, persistence on exit, optional completion.

    Safe no-op if readline is unavailable.
    """
    global _readline
    try:
        import readline  # type: ignore
    except ImportError:
        _readline = None
        return
    _readline = readline

    path = history_file or HISTORY_FILE
    try:
        _ensure_history_dir(path)
        if os.path.exists(path):
            _readline.read_history_file(path)
    except OSError:
        # Non-fatal if history can't be read
        pass

    _readline.set_history_length(history_length)

    if words is not None:
        _readline.set_completer(make_completer(words))
        _readline.set_completer_delims(" ")
        _readline.parse_and_bind("tab: complete")

    def _save_history() -> None:
        try:
            _readline.write_history_file(path)  # type: ignore[attr-defined]
        except OSError:
            pass

    atexit.register(_save_history)


def read_command(prompt: str = "> ") -> str:
    """Read one command line, adding it to history if readline is active."""
    line = input(prompt)
    if _readline is not None:
        # Avoid duplicate immediate entries
        hlen = _readline.get_current_history_length()
        last = _readline.get_history_item(hlen) if hlen else None
        if line and line != last:
            _readline.add_history(line)
    return line


__all__ = ["init_readline", "read_command", "make_completer", "HISTORY_FILE"]
