"""Rebuild a channel's threaded view from flat forum rows

The data-access layer returns one row per channel x message x reply x rating
combination (left joined). ThreadReconstructor collapses that fan-out into a
channel summary, its top-level messages, a nested reply tree under each
message and a rating tally for every channel, message and reply.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, NamedTuple, Optional, Set, Tuple

from codeqna.schemas.rating import RatingTally, RatingTallyEntry, TargetType
from codeqna.schemas.thread import ChannelNode, ChannelThreadResponse, MessageNode, ReplyNode

DEFAULT_MAX_DEPTH = 64

Row = Mapping[str, Any]


class ChannelNotFoundError(LookupError):
    """No row in the source belongs to the requested channel."""

    def __init__(self, channel_id: int):
        self.channel_id = channel_id
        super().__init__(f"Channel {channel_id} not found")


class RatingTarget(NamedTuple):
    """The single channel, message or reply a rating points at."""
    target_type: TargetType
    target_id: int

    @classmethod
    def from_row(cls, row: Row) -> Optional["RatingTarget"]:
        """Derive the target from whichever rating FK is set.

        Returns None when the row carries no rating, or an impossible one
        with more than one target.
        """
        candidates = (
            (TargetType.CHANNEL, row.get("rating_channel_id")),
            (TargetType.MESSAGE, row.get("rating_message_id")),
            (TargetType.REPLY, row.get("rating_reply_id")),
        )
        present = [cls(kind, target_id) for kind, target_id in candidates if target_id is not None]
        if len(present) != 1:
            return None
        return present[0]


@dataclass
class ChannelThread:
    """Result of a reconstruction."""
    channel: ChannelNode
    messages: List[MessageNode]
    tally: Dict[RatingTarget, RatingTally]
    dropped_reply_ids: List[int] = field(default_factory=list)

    def rating_for(self, target_type: TargetType, target_id: int) -> RatingTally:
        return self.tally.get(RatingTarget(target_type, target_id), RatingTally())

    def rating_entries(self) -> List[RatingTallyEntry]:
        return [
            RatingTallyEntry(
                target_type=target.target_type,
                target_id=target.target_id,
                upvotes=counts.upvotes,
                downvotes=counts.downvotes,
            )
            for target, counts in self.tally.items()
        ]

    def to_response(self) -> ChannelThreadResponse:
        return ChannelThreadResponse(
            channel=self.channel,
            messages=self.messages,
            ratings=self.rating_entries(),
        )


class ThreadReconstructor:
    """Rebuild the reply tree of one channel from flat joined rows

    Rows are processed in two passes. The first pass materializes one node
    per message id and per reply id (the first occurrence wins) and collects
    votes. The second pass wires every reply under its parent reply or, for
    direct replies, under its message.

    Handles:
    - Join fan-out (the same message, reply or rating in many rows)
    - Orphaned replies (parent reply or message missing from the rows)
    - Malformed replies (both or neither of message/parent reply set)
    - Cycles and runaway nesting in reply parentage (max_depth)

    Children keep the order in which they first appear in the rows, so the
    caller is expected to supply rows sorted by ascending reply time.

    Example:
        >>> reconstructor = ThreadReconstructor()
        >>> rows = [
        ...     {"channel_id": 1, "topic": "Python", "message_id": 10, "reply_id": 100, "reply_message_id": 10},
        ...     {"channel_id": 1, "topic": "Python", "message_id": 10, "reply_id": 101, "parent_reply_id": 100},
        ... ]
        >>> thread = reconstructor.reconstruct(rows, channel_id=1)
        >>> thread.messages[0].replies[0].replies[0].id
        101
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def reconstruct(self, rows: Iterable[Row], channel_id: int) -> ChannelThread:
        """Build the threaded view of ``channel_id``

        Args:
            rows: Flat forum rows, possibly for several channels
            channel_id: Channel to rebuild

        Returns:
            ChannelThread with the channel summary, ordered messages carrying
            their reply trees, the rating tally and the ids of dropped replies

        Raises:
            ChannelNotFoundError: if no row belongs to ``channel_id``
        """
        channel_rows = [row for row in rows if row.get("channel_id") == channel_id]
        if not channel_rows:
            raise ChannelNotFoundError(channel_id)

        first = channel_rows[0]
        channel = ChannelNode(
            id=channel_id,
            topic=first.get("topic"),
            content=first.get("channel_content"),
            timestamp=first.get("channel_time"),
            screenshot=first.get("channel_screenshot"),
            author=first.get("channel_author"),
        )

        messages: Dict[int, MessageNode] = {}
        replies: Dict[int, ReplyNode] = {}
        parents: Dict[int, Tuple[Optional[int], Optional[int]]] = {}
        seen_reply_ids: Set[int] = set()
        dropped: List[int] = []
        votes: Dict[RatingTarget, Dict[Hashable, bool]] = {}

        for index, row in enumerate(channel_rows):
            message_id = row.get("message_id")
            if message_id is not None and message_id not in messages:
                messages[message_id] = MessageNode(
                    id=message_id,
                    content=row.get("message_content"),
                    timestamp=row.get("message_time"),
                    screenshot=row.get("message_screenshot"),
                    author=row.get("message_author"),
                )

            reply_id = row.get("reply_id")
            if reply_id is not None and reply_id not in seen_reply_ids:
                seen_reply_ids.add(reply_id)
                reply_message_id = row.get("reply_message_id")
                parent_reply_id = row.get("parent_reply_id")
                if (reply_message_id is None) == (parent_reply_id is None):
                    dropped.append(reply_id)
                else:
                    replies[reply_id] = ReplyNode(
                        id=reply_id,
                        content=row.get("reply_content"),
                        timestamp=row.get("reply_time"),
                        screenshot=row.get("reply_screenshot"),
                        author=row.get("reply_author"),
                    )
                    parents[reply_id] = (reply_message_id, parent_reply_id)

            target = RatingTarget.from_row(row)
            if target is not None and row.get("is_upvote") is not None:
                # Fan-out repeats a rating row; one vote per user per target
                voter = row.get("rating_user_id")
                key = voter if voter is not None else ("row", index)
                votes.setdefault(target, {})[key] = bool(row.get("is_upvote"))

        resolved = self._resolve_roots(parents, messages)

        attached: List[int] = []
        for reply_id, node in replies.items():
            if resolved.get(reply_id) is None:
                dropped.append(reply_id)
                continue
            message_id, parent_reply_id = parents[reply_id]
            if parent_reply_id is None:
                messages[message_id].replies.append(node)
            else:
                replies[parent_reply_id].replies.append(node)
            attached.append(reply_id)

        tally = self._tally(channel_id, messages, attached, votes)

        channel.rating = tally[RatingTarget(TargetType.CHANNEL, channel_id)]
        for message_id, node in messages.items():
            node.rating = tally[RatingTarget(TargetType.MESSAGE, message_id)]
        for reply_id in attached:
            replies[reply_id].rating = tally[RatingTarget(TargetType.REPLY, reply_id)]

        return ChannelThread(
            channel=channel,
            messages=list(messages.values()),
            tally=tally,
            dropped_reply_ids=dropped,
        )

    def _resolve_roots(
        self,
        parents: Dict[int, Tuple[Optional[int], Optional[int]]],
        messages: Dict[int, MessageNode],
    ) -> Dict[int, Optional[Tuple[int, int]]]:
        """Map each reply id to (root message id, depth), or None if unreachable

        A reply is unreachable when its parent chain ends at a missing reply
        or message, loops back on itself, or nests deeper than max_depth.
        Direct replies have depth 0.
        """
        resolved: Dict[int, Optional[Tuple[int, int]]] = {}

        for reply_id in parents:
            chain: List[int] = []
            on_chain: Set[int] = set()
            current = reply_id
            anchor: Optional[Tuple[int, int]] = None

            while True:
                if current in resolved:
                    anchor = resolved[current]
                    break
                if current not in parents or current in on_chain:
                    anchor = None
                    break
                chain.append(current)
                on_chain.add(current)
                message_id, parent_reply_id = parents[current]
                if parent_reply_id is None:
                    anchor = (message_id, -1) if message_id in messages else None
                    break
                current = parent_reply_id

            # chain[-1] sits directly below the anchor
            for offset, chained_id in enumerate(reversed(chain), start=1):
                if anchor is None:
                    resolved[chained_id] = None
                    continue
                depth = anchor[1] + offset
                resolved[chained_id] = (anchor[0], depth) if depth < self.max_depth else None

        return resolved

    @staticmethod
    def _tally(
        channel_id: int,
        messages: Dict[int, MessageNode],
        attached: List[int],
        votes: Dict[RatingTarget, Dict[Hashable, bool]],
    ) -> Dict[RatingTarget, RatingTally]:
        """Count votes; every entity in the tree gets an entry, even if unrated."""
        order = [RatingTarget(TargetType.CHANNEL, channel_id)]
        order.extend(RatingTarget(TargetType.MESSAGE, message_id) for message_id in messages)
        order.extend(RatingTarget(TargetType.REPLY, reply_id) for reply_id in attached)
        known = set(order)
        order.extend(target for target in votes if target not in known)

        tally: Dict[RatingTarget, RatingTally] = {}
        for target in order:
            flags = list(votes.get(target, {}).values())
            upvotes = sum(1 for flag in flags if flag)
            tally[target] = RatingTally(upvotes=upvotes, downvotes=len(flags) - upvotes)
        return tally
