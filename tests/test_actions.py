import unittest

from vimgram import Mute, Reply, Search, Send, Unknown, Unmute
from vimgram.core.actions import decode_action, strip_code_fence


class TestStripCodeFence(unittest.TestCase):
    def test_unfenced_text_is_trimmed(self):
        self.assertEqual(strip_code_fence('  {"action": "unmute"}\n'), '{"action": "unmute"}')

    def test_json_tagged_fence(self):
        self.assertEqual(strip_code_fence('```json\n{"a": 1}\n```'), '{"a": 1}')

    def test_untagged_fence(self):
        self.assertEqual(strip_code_fence('\n```\n{"a": 1}\n```  '), '{"a": 1}')

    def test_fence_without_closing(self):
        self.assertEqual(strip_code_fence('```json {"a": 1}'), '{"a": 1}')

    def test_backticks_inside_are_kept(self):
        self.assertEqual(
            strip_code_fence('{"text": "use ``` fences"}'), '{"text": "use ``` fences"}'
        )


class TestDecodeAction(unittest.TestCase):
    def test_variants(self):
        self.assertEqual(decode_action('{"action": "mute", "duration_seconds": 0}'), Mute(0))
        self.assertEqual(
            decode_action('{"action": "mute", "duration_seconds": 4294967295}'), Mute(4294967295)
        )
        self.assertEqual(decode_action('{"action": "unmute", "extra": true}'), Unmute())
        self.assertEqual(
            decode_action('{"action": "search", "query": "q", "from_user": null}'),
            Search(query="q"),
        )
        self.assertEqual(decode_action('{"action": "send", "to": "a", "text": "b"}'), Send("a", "b"))
        self.assertEqual(decode_action('{"action": "reply", "tone": null}'), Reply())
        self.assertEqual(decode_action('{"action": "unknown", "reason": "r"}'), Unknown("r"))

    def test_rejections(self):
        for raw in (
            "not json",
            '"mute"',
            '{"action": 3}',
            '{"action": "MUTE", "duration_seconds": 1}',
            '{"action": "mute", "duration_seconds": "60"}',
            '{"action": "mute", "duration_seconds": 1.5}',
            '{"action": "mute", "duration_seconds": true}',
            '{"action": "mute", "duration_seconds": 4294967296}',
            '{"action": "search"}',
            '{"action": "search", "query": "q", "from_user": 7}',
            '{"action": "unknown"}',
        ):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    decode_action(raw)

    def test_to_dict_round_trips_wire_form(self):
        action = Search(query="invoice", from_user="bob")
        self.assertEqual(
            action.to_dict(), {"action": "search", "query": "invoice", "from_user": "bob"}
        )
        self.assertEqual(Unmute().to_dict(), {"action": "unmute"})

    def test_reply_effective_tone(self):
        self.assertEqual(Reply().effective_tone, "casual")
        self.assertEqual(Reply(tone="whimsical").effective_tone, "casual")
        self.assertEqual(Reply(tone="technical").effective_tone, "technical")
