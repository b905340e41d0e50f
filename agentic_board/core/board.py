"""
Message Board Module for Agentic-Board

Two pieces of shared memory used by every agent:
- MessageBoard: the append-only record log, single source of truth
- Blackboard: a category index mapping each artifact category to the most
  recently appended message of that category

The Engine is the only writer. Agents get read access and must never append
or update the index themselves.
"""

from datetime import datetime, timezone
from typing import Iterator, Optional

from agentic_board.core.exceptions import BoardError
from agentic_board.core.state import BoardMessage, MessageCategory
from agentic_board.utils.logger import get_logger, LogCategory

logger = get_logger(__name__)


class MessageBoard:
    """
    Append-only log of BoardMessages.

    Ids are assigned by the board, start at 1 and increase by one per append.
    The id counter belongs to this instance, so independent runs (or tests)
    never share ids. No operation removes or edits a message.
    """

    def __init__(self) -> None:
        self._messages: list[BoardMessage] = []
        self._next_id = 1

    def append(self, author: str, category: MessageCategory, content: str) -> BoardMessage:
        """
        Append a new message and return the immutable record.

        Args:
            author: "user" or an agent role value
            category: Artifact category of the message
            content: Message text

        Returns:
            The appended BoardMessage

        Raises:
            BoardError: If the author is empty or the category is not a MessageCategory
        """
        if not isinstance(category, MessageCategory):
            raise BoardError(f"Unknown message category: {category!r}")
        if not author:
            raise BoardError("Message author must not be empty")

        message = BoardMessage(
            id=self._next_id,
            author=author,
            category=category,
            content=content,
            created_at=datetime.now(timezone.utc),
        )
        self._next_id += 1
        self._messages.append(message)

        logger.info(
            f"#{message.id} {category.value} by {author} ({len(content)} chars)",
            category=LogCategory.BOARD
        )
        return message

    def all(self) -> tuple[BoardMessage, ...]:
        """Ordered, read-only view of every message on the board."""
        return tuple(self._messages)

    def get(self, message_id: int) -> Optional[BoardMessage]:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    def latest(self, category: MessageCategory) -> Optional[BoardMessage]:
        """Most recently appended message of a category, by reverse scan."""
        for message in reversed(self._messages):
            if message.category == category:
                return message
        return None

    def authored_by(
        self,
        author: str,
        category: Optional[MessageCategory] = None
    ) -> list[BoardMessage]:
        """Messages by one author (optionally of one category), oldest first."""
        return [
            m for m in self._messages
            if m.author == author and (category is None or m.category == category)
        ]

    def latest_by(self, author: str, category: MessageCategory) -> Optional[BoardMessage]:
        for message in reversed(self._messages):
            if message.author == author and message.category == category:
                return message
        return None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[BoardMessage]:
        return iter(tuple(self._messages))


class Blackboard:
    """
    Category index over a MessageBoard.

    Holds, for each category, the highest-id message seen so far. It is a
    cache: resolve() falls back to a reverse scan of the board for any
    category the index has not seen, so callers always get the same answer
    the board itself would give.
    """

    def __init__(self) -> None:
        self._latest: dict[MessageCategory, BoardMessage] = {}

    def update(self, message: BoardMessage) -> bool:
        """
        Record a message if it is newer than the cached one for its category.

        Args:
            message: A message that has already been appended to the board

        Returns:
            True if the index entry was replaced
        """
        current = self._latest.get(message.category)
        if current is not None and current.id >= message.id:
            logger.debug(
                f"Ignoring stale index update #{message.id} for {message.category.value} "
                f"(cached #{current.id})",
                category=LogCategory.BOARD
            )
            return False

        self._latest[message.category] = message
        return True

    def lookup(self, category: MessageCategory) -> Optional[BoardMessage]:
        return self._latest.get(category)

    def resolve(self, board: MessageBoard, category: MessageCategory) -> Optional[BoardMessage]:
        """Index lookup, falling back to a reverse scan of the board."""
        cached = self._latest.get(category)
        if cached is not None:
            return cached
        return board.latest(category)

    def snapshot(self) -> dict[MessageCategory, BoardMessage]:
        return dict(self._latest)

    def __contains__(self, category: MessageCategory) -> bool:
        return category in self._latest
