import unittest

from groupme.api import (
    BlocksAPI,
    BotsAPI,
    ChatsAPI,
    DirectMessagesAPI,
    LeaderboardAPI,
    LikesAPI,
    MembersAPI,
    MessagesAPI,
    MessagesIndexOptions,
    SmsAPI,
    UsersAPI,
)
from groupme.errors import ApiError, DecodeError, ValidationError
from groupme.types import MentionsAttachment

from .helpers import FakeServer

class TestMessagesIndex(unittest.TestCase):

    def test_returns_messages_in_server_order(self):
        server = FakeServer(body={"response": {"count": 2, "messages": [{"id": "m1"}, {"id": "m2"}]}})
        messages = MessagesAPI(server.api()).index("g1")

        self.assertEqual([m.id for m in messages], ["m1", "m2"])
        self.assertEqual(server.last.method, "GET")
        self.assertEqual(server.last.url.path, "/v3/groups/g1/messages")
        self.assertEqual(server.last_params(), {})
        self.assertTrue(server.responses[-1].is_closed)

    def test_limit_over_maximum_is_rejected_locally(self):
        server = FakeServer(body={"response": {"count": 0, "messages": []}})
        with self.assertRaises(ValidationError) as ctx:
            MessagesAPI(server.api()).index("g1", MessagesIndexOptions(limit=150))
        self.assertIn("100", str(ctx.exception))
        self.assertEqual(server.requests, [])

    def test_limit_at_maximum(self):
        server = FakeServer(body={"response": {"count": 0, "messages": []}})
        MessagesAPI(server.api()).index("g1", MessagesIndexOptions(limit=100))
        self.assertEqual(server.last_params(), {"limit": "100"})

    def test_cursor_parameters_are_independent(self):
        cases = [
            (MessagesIndexOptions(before_id="b"), {"before_id": "b"}),
            (MessagesIndexOptions(since_id="s"), {"since_id": "s"}),
            (MessagesIndexOptions(after_id="a"), {"after_id": "a"}),
            (
                MessagesIndexOptions(before_id="b", since_id="s", after_id="a", limit=20),
                {"before_id": "b", "since_id": "s", "after_id": "a", "limit": "20"},
            ),
        ]
        for options, params in cases:
            with self.subTest(params=params):
                server = FakeServer(body={"response": {"count": 0, "messages": []}})
                MessagesAPI(server.api()).index("g1", options)
                self.assertEqual(server.last_params(), params)

    def test_not_modified_is_empty(self):
        server = FakeServer(status_code=304)
        self.assertEqual(MessagesAPI(server.api()).index("g1", MessagesIndexOptions(since_id="m9")), [])
        self.assertTrue(server.responses[-1].is_closed)

    def test_decodes_attachments(self):
        server = FakeServer(body={"response": {"count": 1, "messages": [{
            "id": "m1",
            "group_id": "g1",
            "text": "@Jane hi",
            "favorited_by": ["u2", "u1"],
            "attachments": [{"type": "mentions", "loci": [[0, 5]], "user_ids": ["u2"]}],
        }]}})
        message = MessagesAPI(server.api()).index("g1")[0]

        self.assertEqual(message.favorited_by, ["u2", "u1"])
        self.assertIsInstance(message.attachments[0], MentionsAttachment)
        self.assertEqual(message.attachments[0].loci, [(0, 5)])

    def test_flat_payload_is_decode_error(self):
        server = FakeServer(body={"response": [{"id": "m1"}]})
        with self.assertRaises(DecodeError):
            MessagesAPI(server.api()).index("g1")

    def test_malformed_timestamp_is_decode_error(self):
        server = FakeServer(body={"response": {"count": 1, "messages": [{"id": "m1", "created_at": "yesterday"}]}})
        with self.assertRaises(DecodeError):
            MessagesAPI(server.api()).index("g1")

    def test_unknown_group(self):
        server = FakeServer(status_code=404, body={"meta": {"code": 404, "errors": ["not found"]}, "response": None})
        with self.assertRaises(ApiError) as ctx:
            MessagesAPI(server.api()).index("missing")
        self.assertEqual(ctx.exception.errors, ["not found"])

class TestLikes(unittest.TestCase):

    def test_like(self):
        server = FakeServer()
        self.assertIsNone(LikesAPI(server.api()).create("g1", "m1"))
        self.assertEqual(server.last.method, "POST")
        self.assertEqual(server.last.url.path, "/v3/messages/g1/m1/like")
        self.assertTrue(server.responses[-1].is_closed)

    def test_unlike(self):
        server = FakeServer()
        self.assertIsNone(LikesAPI(server.api()).destroy("g1", "m1"))
        self.assertEqual(server.last.method, "POST")
        self.assertEqual(server.last.url.path, "/v3/messages/g1/m1/unlike")

    def test_like_error(self):
        server = FakeServer(status_code=400, body={"meta": {"code": 400, "errors": ["already liked"]}})
        with self.assertRaises(ApiError):
            LikesAPI(server.api()).create("g1", "m1")

class TestPlaceholderServices(unittest.TestCase):

    def test_share_one_transport(self):
        api = FakeServer().api()
        for cls in [MembersAPI, ChatsAPI, DirectMessagesAPI, LeaderboardAPI, BotsAPI, UsersAPI, SmsAPI, BlocksAPI]:
            with self.subTest(service=cls.__name__):
                self.assertIs(cls(api).api, api)

if __name__ == "__main__":
    unittest.main()
