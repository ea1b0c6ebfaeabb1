"""Tests for the ThreadReconstructor"""

import pytest

from codeqna.schemas.rating import RatingTally, TargetType
from codeqna.services.thread_reconstructor import (
    ChannelNotFoundError,
    RatingTarget,
    ThreadReconstructor,
)

from fixtures import channel_row, example_rows, message_row, rating_row, reply_row


@pytest.fixture
def reconstructor():
    return ThreadReconstructor()


def reply_ids(nodes):
    return [node.id for node in nodes]


class TestChannelSummary:

    def test_example_thread(self, reconstructor):
        thread = reconstructor.reconstruct(example_rows(), channel_id=1)

        assert thread.channel.id == 1
        assert thread.channel.topic == "Python questions"
        assert reply_ids(thread.messages) == [10]

        message = thread.messages[0]
        assert reply_ids(message.replies) == [100]
        assert reply_ids(message.replies[0].replies) == [101]
        assert message.replies[0].replies[0].replies == []

        assert message.replies[0].rating == RatingTally(upvotes=1, downvotes=0)
        assert message.replies[0].replies[0].rating == RatingTally()
        assert thread.dropped_reply_ids == []

    def test_unknown_channel_raises(self, reconstructor):
        with pytest.raises(ChannelNotFoundError) as excinfo:
            reconstructor.reconstruct(example_rows(), channel_id=2)
        assert excinfo.value.channel_id == 2

    def test_empty_rows_raise(self, reconstructor):
        with pytest.raises(ChannelNotFoundError):
            reconstructor.reconstruct([], channel_id=1)

    def test_rows_of_other_channels_are_ignored(self, reconstructor):
        rows = [
            message_row(20, channel_id=2),
            message_row(10, channel_id=1),
            reply_row(200, message_id=20, channel_id=2),
            rating_row("message", 20, channel_id=2),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert reply_ids(thread.messages) == [10]
        assert thread.messages[0].replies == []
        assert RatingTarget(TargetType.MESSAGE, 20) not in thread.tally

    def test_channel_without_messages(self, reconstructor):
        thread = reconstructor.reconstruct([channel_row(5, topic="Empty")], channel_id=5)

        assert thread.channel.id == 5
        assert thread.channel.topic == "Empty"
        assert thread.messages == []
        assert thread.channel.rating == RatingTally()

    def test_channel_fields_taken_from_first_row(self, reconstructor):
        rows = [channel_row(1, topic="First"), channel_row(1, topic="Second")]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert thread.channel.topic == "First"
        assert thread.channel.author == "Grace Hopper"


class TestDeduplication:

    def test_fan_out_produces_one_node_each(self, reconstructor):
        rows = example_rows() + example_rows() + [message_row(10)]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert reply_ids(thread.messages) == [10]
        assert reply_ids(thread.messages[0].replies) == [100]
        assert reply_ids(thread.messages[0].replies[0].replies) == [101]

    def test_first_occurrence_wins(self, reconstructor):
        rows = [
            message_row(10, content="original"),
            message_row(10, content="duplicate"),
            reply_row(100, message_id=10, reply_content="first"),
            reply_row(100, message_id=10, reply_content="second"),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert thread.messages[0].content == "original"
        assert thread.messages[0].replies[0].content == "first"

    def test_message_order_follows_rows(self, reconstructor):
        rows = [message_row(30), message_row(10), message_row(20)]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert reply_ids(thread.messages) == [30, 10, 20]


class TestReplyTree:

    def test_children_keep_row_order(self, reconstructor):
        rows = [
            reply_row(100, message_id=10),
            reply_row(103, message_id=10, parent_reply_id=100, direct=False),
            reply_row(101, message_id=10, parent_reply_id=100, direct=False),
            reply_row(102, message_id=10),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        message = thread.messages[0]
        assert reply_ids(message.replies) == [100, 102]
        assert reply_ids(message.replies[0].replies) == [103, 101]

    def test_child_listed_before_parent_is_attached(self, reconstructor):
        rows = [
            reply_row(101, message_id=10, parent_reply_id=100, direct=False),
            reply_row(100, message_id=10),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert reply_ids(thread.messages[0].replies[0].replies) == [101]

    def test_deep_nesting(self, reconstructor):
        rows = [reply_row(100, message_id=10)]
        rows += [
            reply_row(reply_id, message_id=10, parent_reply_id=reply_id - 1, direct=False)
            for reply_id in range(101, 106)
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        node = thread.messages[0].replies[0]
        depth = 0
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert node.id == 105
        assert depth == 5

    def test_orphan_reply_is_dropped(self, reconstructor):
        rows = [
            reply_row(100, message_id=10),
            reply_row(101, message_id=10, parent_reply_id=999, direct=False),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert reply_ids(thread.messages[0].replies) == [100]
        assert thread.messages[0].replies[0].replies == []
        assert thread.dropped_reply_ids == [101]

    def test_descendants_of_orphan_are_dropped(self, reconstructor):
        rows = [
            message_row(10),
            reply_row(101, message_id=10, parent_reply_id=999, direct=False),
            reply_row(102, message_id=10, parent_reply_id=101, direct=False),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert thread.messages[0].replies == []
        assert sorted(thread.dropped_reply_ids) == [101, 102]

    def test_reply_to_missing_message_is_dropped(self, reconstructor):
        row = channel_row(1)
        row.update({"reply_id": 100, "reply_message_id": 77})
        thread = reconstructor.reconstruct([row], channel_id=1)

        assert thread.messages == []
        assert thread.dropped_reply_ids == [100]

    @pytest.mark.parametrize("message_link, parent_link", [(10, 100), (None, None)])
    def test_malformed_reply_is_dropped(self, reconstructor, message_link, parent_link):
        rows = [
            reply_row(100, message_id=10),
            reply_row(101, message_id=10, reply_message_id=message_link, parent_reply_id=parent_link),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert reply_ids(thread.messages[0].replies) == [100]
        assert thread.messages[0].replies[0].replies == []
        assert thread.dropped_reply_ids == [101]

    def test_cycle_terminates_and_drops_members(self, reconstructor):
        rows = [
            reply_row(100, message_id=10),
            reply_row(101, message_id=10, parent_reply_id=102, direct=False),
            reply_row(102, message_id=10, parent_reply_id=101, direct=False),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert reply_ids(thread.messages[0].replies) == [100]
        assert thread.messages[0].replies[0].replies == []
        assert sorted(thread.dropped_reply_ids) == [101, 102]

    def test_self_parent_is_dropped(self, reconstructor):
        rows = [
            message_row(10),
            reply_row(100, message_id=10, parent_reply_id=100, direct=False),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert thread.messages[0].replies == []
        assert thread.dropped_reply_ids == [100]

    def test_max_depth_cuts_deeper_replies(self):
        rows = [
            reply_row(100, message_id=10),
            reply_row(101, message_id=10, parent_reply_id=100, direct=False),
            reply_row(102, message_id=10, parent_reply_id=101, direct=False),
            reply_row(103, message_id=10, parent_reply_id=102, direct=False),
        ]
        thread = ThreadReconstructor(max_depth=2).reconstruct(rows, channel_id=1)

        top = thread.messages[0].replies[0]
        assert top.id == 100
        assert reply_ids(top.replies) == [101]
        assert top.replies[0].replies == []
        assert sorted(thread.dropped_reply_ids) == [102, 103]


class TestRatingTally:

    def test_every_node_has_an_entry(self, reconstructor):
        rows = example_rows() + [message_row(11)]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert list(thread.tally) == [
            RatingTarget(TargetType.CHANNEL, 1),
            RatingTarget(TargetType.MESSAGE, 10),
            RatingTarget(TargetType.MESSAGE, 11),
            RatingTarget(TargetType.REPLY, 100),
            RatingTarget(TargetType.REPLY, 101),
        ]
        assert thread.rating_for(TargetType.MESSAGE, 11) == RatingTally()
        assert thread.channel.rating == RatingTally()

    def test_counts_per_target(self, reconstructor):
        rows = [
            message_row(10),
            rating_row("channel", 1, is_upvote=True, user_id=1),
            rating_row("channel", 1, is_upvote=False, user_id=2),
            rating_row("message", 10, is_upvote=False, user_id=1),
            rating_row("message", 10, is_upvote=False, user_id=3),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert thread.channel.rating == RatingTally(upvotes=1, downvotes=1)
        assert thread.messages[0].rating == RatingTally(upvotes=0, downvotes=2)

    def test_fan_out_does_not_double_count(self, reconstructor):
        vote = rating_row("reply", 100, is_upvote=True, user_id=7)
        rows = [reply_row(100, message_id=10), vote, dict(vote), dict(vote)]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert thread.rating_for(TargetType.REPLY, 100) == RatingTally(upvotes=1, downvotes=0)

    def test_later_vote_of_same_user_wins(self, reconstructor):
        rows = [
            message_row(10),
            rating_row("message", 10, is_upvote=True, user_id=7),
            rating_row("message", 10, is_upvote=False, user_id=7),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert thread.messages[0].rating == RatingTally(upvotes=0, downvotes=1)

    def test_anonymous_votes_count_per_row(self, reconstructor):
        rows = [
            message_row(10),
            rating_row("message", 10, is_upvote=True, user_id=None),
            rating_row("message", 10, is_upvote=True, user_id=None),
        ]
        thread = reconstructor.reconstruct(rows, channel_id=1)
        assert thread.messages[0].rating.upvotes == 2

    def test_rating_with_several_targets_is_ignored(self, reconstructor):
        row = rating_row("message", 10, user_id=7)
        row["rating_reply_id"] = 100
        thread = reconstructor.reconstruct([message_row(10), row], channel_id=1)

        assert thread.messages[0].rating == RatingTally()
        assert RatingTarget(TargetType.REPLY, 100) not in thread.tally

    def test_rating_without_vote_flag_is_ignored(self, reconstructor):
        row = rating_row("message", 10, user_id=7)
        row["is_upvote"] = None
        thread = reconstructor.reconstruct([message_row(10), row], channel_id=1)
        assert thread.messages[0].rating == RatingTally()

    def test_votes_on_absent_targets_are_kept_in_tally(self, reconstructor):
        rows = [message_row(10), rating_row("reply", 555, is_upvote=False, user_id=2)]
        thread = reconstructor.reconstruct(rows, channel_id=1)

        assert thread.rating_for(TargetType.REPLY, 555) == RatingTally(upvotes=0, downvotes=1)
        assert list(thread.tally)[-1] == RatingTarget(TargetType.REPLY, 555)

    def test_unknown_target_reads_as_zero(self, reconstructor):
        thread = reconstructor.reconstruct(example_rows(), channel_id=1)
        assert thread.rating_for(TargetType.MESSAGE, 4242) == RatingTally()


class TestResponse:

    def test_response_shape(self, reconstructor):
        response = reconstructor.reconstruct(example_rows(), channel_id=1).to_response()
        payload = response.model_dump(mode="json")

        assert payload["channel"]["id"] == 1
        assert payload["messages"][0]["replies"][0]["replies"][0]["id"] == 101
        assert payload["messages"][0]["replies"][0]["rating"] == {"upvotes": 1, "downvotes": 0}
        assert {
            "target_type": "reply",
            "target_id": 100,
            "upvotes": 1,
            "downvotes": 0,
        } in payload["ratings"]

    def test_reconstruction_is_deterministic(self, reconstructor):
        rows = example_rows() + [message_row(11), rating_row("message", 11, user_id=3)]
        first = reconstructor.reconstruct(rows, channel_id=1).to_response()
        second = reconstructor.reconstruct(list(rows), channel_id=1).to_response()
        assert first == second

    def test_input_rows_are_not_mutated(self, reconstructor):
        rows = example_rows()
        snapshot = [dict(row) for row in rows]
        reconstructor.reconstruct(rows, channel_id=1)
        assert rows == snapshot
