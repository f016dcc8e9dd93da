"""Adventure book core: text parser, page graph and play-through state machine.

Book text is parsed into a Book (page id → Page). An AdventureSession walks
the graph under the rules of an Edition and reports every move as a
Transition. Nothing in this package performs I/O.
"""

from .editions import BASE, EDITIONS, GEMS, ITEMS, VIDEO, Edition, get_edition  # noqa: F401
from .models import RESTART, Book, Choice, Page, Reward  # noqa: F401
from .parser import ENTRY_PAGE, has_entry_point, parse_book  # noqa: F401
from .session import (  # noqa: F401
    AdventureSession,
    InvalidTransition,
    MissingEntryPoint,
    NoBookLoaded,
    PageNotFound,
    SessionError,
    SessionSnapshot,
    SessionStatus,
    Transition,
)
