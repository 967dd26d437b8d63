"""
Navigation state machine of the TUI client.

``Navigator.update`` is the only place the client state changes. It takes
one message at a time (key press, fetch completion, resize, spinner tick)
and returns the commands the event loop should run next.

Loading is an overlay flag: while a fetch is in flight the previous quote
or error stays in memory. Completions are applied in arrival order, so the
last one to arrive wins even if it answers an older request. Content errors
from the server are shown like transport errors.

Example:
    ```python
    nav = Navigator()
    commands = nav.init()                   # [Fetch(path="")]
    nav.update(FetchDone(quote=" Hi "))     # state.quote == "Hi"
    commands = nav.update(KeyPress("l"))    # [Fetch(path=<next link>)]
    ```
"""
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from excuses.config.settings import NAVIGATION_PATHS
from excuses.protocol.messages import FetchQuoteResponse

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 10

NEXT = "next"
PREVIOUS = "previous"
FIRST = "first"
LAST = "last"
RANDOM = "random"
QUIT = "quit"

KEY_BINDINGS = {
    "q": QUIT,
    "ctrl+c": QUIT,
    "right": NEXT,
    "l": NEXT,
    "left": PREVIOUS,
    "h": PREVIOUS,
    "a": FIRST,
    "e": LAST,
    "r": RANDOM,
}

@dataclass
class ClientState:
    quote: str = ""
    next_link: str = ""
    previous_link: str = ""
    loading: bool = True
    err: Optional[str] = None
    color_seed: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    spinner_frame: int = 0
    done: bool = False

# Messages

@dataclass(frozen=True)
class KeyPress:
    key: str

@dataclass(frozen=True)
class WindowSize:
    width: int
    height: int

@dataclass(frozen=True)
class Tick:
    pass

@dataclass(frozen=True)
class FetchDone:
    quote: str = ""
    next_link: str = ""
    previous_link: str = ""
    err: Optional[str] = None
    path: str = ""

    @classmethod
    def from_response(cls, path: str, response: FetchQuoteResponse) -> "FetchDone":
        if response.error:
            return cls(err=response.error, path=path)
        return cls(
            quote=response.quote,
            next_link=response.next_link,
            previous_link=response.previous_link,
            path=path,
        )

    @classmethod
    def from_error(cls, path: str, error: BaseException) -> "FetchDone":
        return cls(err=str(error) or type(error).__name__, path=path)

Message = Union[KeyPress, WindowSize, Tick, FetchDone]

# Commands

@dataclass(frozen=True)
class Fetch:
    path: str

@dataclass(frozen=True)
class Quit:
    pass

Command = Union[Fetch, Quit]

class Navigator:
    """
    Owns the ClientState and applies messages to it.

    Attributes:
        state: Current client state
        rng: Source of cosmetic color seeds
        paths: Page references for the first/last/random jumps
    """

    def __init__(self, rng: Optional[random.Random] = None, paths: Optional[Dict[str, str]] = None):
        self.rng = rng or random.Random()
        self.paths = paths or NAVIGATION_PATHS
        self.state = ClientState(color_seed=self._roll_seed())

    def _roll_seed(self) -> int:
        return self.rng.randrange(1 << 16)

    def init(self) -> List[Command]:
        """Commands to run at startup: fetch the default page."""
        return [Fetch(path="")]

    def update(self, msg: Message) -> List[Command]:
        if self.state.done:
            return []

        if isinstance(msg, KeyPress):
            return self._on_key(msg.key)

        if isinstance(msg, FetchDone):
            self.state.loading = False
            if msg.err is not None:
                self.state.err = msg.err
                return []
            self.state.err = None
            self.state.quote = msg.quote.strip()
            self.state.next_link = msg.next_link
            self.state.previous_link = msg.previous_link
            return []

        if isinstance(msg, WindowSize):
            self.state.width = msg.width
            self.state.height = msg.height
            return []

        if isinstance(msg, Tick):
            self.state.spinner_frame += 1
            return []

        return []

    def _on_key(self, key: str) -> List[Command]:
        action = KEY_BINDINGS.get(key)
        if action is None:
            return []
        if action == QUIT:
            self.state.done = True
            return [Quit()]

        if action == NEXT:
            path = self.state.next_link
        elif action == PREVIOUS:
            path = self.state.previous_link
        else:
            path = self.paths[action]

        self.state.loading = True
        self.state.color_seed = self._roll_seed()
        return [Fetch(path=path)]
