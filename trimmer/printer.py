# trimmer/printer.py
# HIG: Depth + Consistency: centralized output formatter for the CLI.

import os
import sys
from typing import Optional


class OutputPrinter:
    """
    Output formatter for the trim-silence CLI.

    - Results go to stdout, failures always to stderr
    - Symbols carry meaning; color is optional (NO_COLOR respected)
    - Quiet mode suppresses everything except errors
    """

    # HIG: Depth: symbols define hierarchy levels
    SYMBOLS : dict[str, str] = {
        "ok"      : "✓",
        "fail"    : "✗",
        "error"   : "❌",
        "warning" : "⚠️ ",
        "info"    : "ℹ️ ",
        "hint"    : "→",
    }

    COLORS : dict[str, str] = {
        "green"  : "32",
        "red"    : "31",
        "yellow" : "33",
        "cyan"   : "36",
        "dim"    : "90",
    }

    def __init__(self, quiet : bool = False, no_color : bool = False) -> None:
        self.quiet    : bool = quiet
        self.no_color : bool = no_color or bool(os.environ.get("NO_COLOR", ""))

    # ── Internal ─────────────────────────────────────────────────

    def _colorize(self, text : str, code : str) -> str:
        """Apply ANSI color code if color output is enabled."""
        if self.no_color:
            return text
        return f"\033[{code}m{text}\033[0m"

    # ── Per-file lines ───────────────────────────────────────────

    def item_ok(self, text : str) -> None:
        """One successful file, e.g. '✓ song.mp3 -> song_trimmed.mp3'."""
        if self.quiet:
            return
        symbol : str = self._colorize(self.SYMBOLS["ok"], self.COLORS["green"])
        print(f"{symbol} {text}")

    def item_failed(self, text : str) -> None:
        """One failed file. Always shown, on stderr."""
        symbol : str = self._colorize(self.SYMBOLS["fail"], self.COLORS["red"])
        print(f"{symbol} {text}", file=sys.stderr)

    def summary(self, ok : int, errors : int, skipped : int) -> None:
        if self.quiet:
            return
        line : str = f"Done. ok={ok}, errors={errors}, skipped={skipped}"
        code : str = self.COLORS["green"] if errors == 0 else self.COLORS["yellow"]
        print(f"\n{self._colorize(line, code)}")

    # ── Level-1 outputs ──────────────────────────────────────────

    def error(self, message : str, hint : Optional[str] = None) -> None:
        """Print an error to stderr with optional fix hint."""
        # HIG: Consistency: errors always to stderr
        symbol : str = self._colorize(self.SYMBOLS["error"], self.COLORS["red"])
        msg    : str = self._colorize(message, self.COLORS["red"])
        print(f"{symbol}  {msg}", file=sys.stderr)
        if hint:
            h : str = self._colorize(
                f"{self.SYMBOLS['hint']} {hint}", self.COLORS["cyan"]
            )
            print(f"    {h}", file=sys.stderr)

    def warning(self, message : str, hint : Optional[str] = None) -> None:
        if self.quiet:
            return
        symbol : str = self._colorize(self.SYMBOLS["warning"], self.COLORS["yellow"])
        msg    : str = self._colorize(message, self.COLORS["yellow"])
        print(f"{symbol} {msg}")
        if hint:
            h : str = self._colorize(
                f"{self.SYMBOLS['hint']} {hint}", self.COLORS["cyan"]
            )
            print(f"    {h}")

    def info(self, message : str) -> None:
        """Plain informational line (headers, notes)."""
        if self.quiet:
            return
        print(message)

    def detail(self, message : str) -> None:
        """Dimmed secondary line, e.g. the settings in effect."""
        if self.quiet:
            return
        print(self._colorize(message, self.COLORS["dim"]))
