# main.py
"""
Console front end: pipe transcripts in, get commands out.

Each line on stdin is one utterance, e.g. the output of a speech-to-text
process::

    some-stt-tool | python -m synapse_voice

Decoded commands and engine state changes are printed with Rich.
"""
from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from .commands import CommandEvent
from .config import EngineConfig
from .errors import SourceError
from .utils.logging_system import setup_log_system
from .voice_recognition import ConsoleTranscriptSource, EngineState, RecognitionEngine

logger = setup_log_system("main")


class VoiceApp:
    """Owns the transcript source and the engine; prints what the engine emits."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        config: Optional[EngineConfig] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        self.console = console or Console()
        self.source = ConsoleTranscriptSource(stream, language=self.config.language)
        self.engine = RecognitionEngine(
            self.source,
            self.on_command,
            self.on_state,
            on_error=self.on_error,
            config=self.config,
        )
        self.commands: list[CommandEvent] = []
        self._done = threading.Event()

    # ------------- Sink -------------

    def on_command(self, event: CommandEvent) -> None:
        self.commands.append(event)
        self.console.print(f"[bold green]{event.command}[/]  [dim]{escape(event.raw)}[/]")

    def on_state(self, state: EngineState) -> None:
        self.console.print(f"[cyan]state:[/] {state}")
        if state is EngineState.UNSUPPORTED:
            self._done.set()

    def on_error(self, error: SourceError) -> None:
        self.console.print(f"[yellow]source error:[/] {error}")

    # ------------- App lifecycle -------------

    def run(self) -> int:
        """Listen until the input is exhausted or Ctrl+C; return an exit code."""
        self.engine.start()
        if self.engine.state is EngineState.UNSUPPORTED:
            return 1
        try:
            while not (self._done.is_set() or self.source.exhausted.is_set()):
                self.source.exhausted.wait(0.1)
        except KeyboardInterrupt:
            logger.debug("Shutting down (KeyboardInterrupt received)…")
        finally:
            self.engine.stop()
            logger.info("Application terminated.")
        return 0


def main() -> int:
    app = VoiceApp(sys.stdin)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
