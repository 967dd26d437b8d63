"""
Event loop of the TUI client.

Everything the navigator reacts to is turned into a message on one asyncio
queue: key presses (stdin in cbreak mode), resizes (SIGWINCH), spinner
ticks and fetch completions. A single consumer applies them in order and
redraws the frame, so the state is never touched from two places at once.
Fetches run as tasks and are never cancelled when superseded.

Example:
    ```python
    async with QuoteClient("localhost:1234") as client:
        await ExcusesApp(client).run()
    ```
"""
import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from contextlib import nullcontext
from typing import List, Optional, Protocol, Set

from rich.console import Console
from rich.live import Live

from excuses.client.rpc import RPCError
from excuses.protocol.messages import FetchQuoteResponse
from excuses.tui.keys import decode_keys
from excuses.tui.model import Command, Fetch, FetchDone, KeyPress, Message, Navigator, Quit, Tick, WindowSize
from excuses.tui.view import render

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1
READ_CHUNK = 1024

class QuoteService(Protocol):
    async def fetch_quote(self, path: str) -> FetchQuoteResponse:
        ...

class TerminalInput:
    """
    Puts the terminal in cbreak mode and forwards key presses to the queue.

    Terminal attributes are restored on exit.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, queue: "asyncio.Queue[Message]", fd: Optional[int] = None):
        self.loop = loop
        self.queue = queue
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved = None

    def __enter__(self):
        self._saved = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd)
        self.loop.add_reader(self.fd, self._on_readable)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.loop.remove_reader(self.fd)
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def _on_readable(self) -> None:
        data = os.read(self.fd, READ_CHUNK)
        if not data:
            # stdin closed
            self.queue.put_nowait(KeyPress("ctrl+c"))
            return
        for key in decode_keys(data.decode("utf-8", errors="ignore")):
            self.queue.put_nowait(KeyPress(key))

class ExcusesApp:
    """
    Attributes:
        client: Anything with an async ``fetch_quote(path)``
        navigator: The state machine
        console: Where frames are drawn
        queue: The single event queue
    """

    def __init__(self, client: QuoteService, navigator: Optional[Navigator] = None, console: Optional[Console] = None):
        self.client = client
        self.navigator = navigator or Navigator()
        self.console = console or Console()
        self.queue: "asyncio.Queue[Message]" = asyncio.Queue()
        self._tasks: Set[asyncio.Task] = set()

    def post(self, msg: Message) -> None:
        self.queue.put_nowait(msg)

    async def _fetch(self, path: str) -> None:
        logger.info(f"Fetching quote path={path!r}")
        try:
            reply = await self.client.fetch_quote(path)
        except RPCError as e:
            logger.error(f"FetchQuote failed path={path!r} error={e}")
            self.post(FetchDone.from_error(path, e))
            return
        except Exception as e:
            # a fetch must always end with a FetchDone
            logger.exception(f"FetchQuote crashed path={path!r}")
            self.post(FetchDone.from_error(path, e))
            return
        if reply.error:
            logger.warning(f"FetchQuote returned content error path={path!r} error={reply.error}")
        self.post(FetchDone.from_response(path, reply))

    def dispatch(self, commands: List[Command]) -> bool:
        """Run commands; False once a Quit has been seen."""
        for command in commands:
            if isinstance(command, Quit):
                return False
            if isinstance(command, Fetch):
                task = asyncio.create_task(self._fetch(command.path))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
        return True

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(TICK_INTERVAL)
            self.post(Tick())

    def _on_resize(self) -> None:
        size = os.get_terminal_size(sys.stdout.fileno())
        self.post(WindowSize(size.columns, size.lines))

    async def run(self, interactive: Optional[bool] = None) -> None:
        """
        Process messages until the user quits.

        Args:
            interactive: Attach to the terminal (stdin keys, signals). By
                default this happens only when stdin is a TTY.
        """
        loop = asyncio.get_running_loop()
        if interactive is None:
            interactive = sys.stdin.isatty()

        width, height = self.console.size
        self.navigator.update(WindowSize(width, height))

        terminal = TerminalInput(loop, self.queue) if interactive else None
        if interactive:
            loop.add_signal_handler(signal.SIGWINCH, self._on_resize)
            loop.add_signal_handler(signal.SIGINT, self.post, KeyPress("ctrl+c"))

        ticker = asyncio.create_task(self._tick())
        try:
            with terminal or nullcontext(), Live(render(self.navigator.state), console=self.console, auto_refresh=False) as live:
                running = self.dispatch(self.navigator.init())
                while running:
                    msg = await self.queue.get()
                    running = self.dispatch(self.navigator.update(msg))
                    if running:
                        live.update(render(self.navigator.state), refresh=True)
        finally:
            ticker.cancel()
            for task in list(self._tasks):
                task.cancel()
            await asyncio.gather(ticker, *self._tasks, return_exceptions=True)
            if interactive:
                loop.remove_signal_handler(signal.SIGWINCH)
                loop.remove_signal_handler(signal.SIGINT)
