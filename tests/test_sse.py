"""Tests for SSE parsing and follow-up splitting."""

from dingtalk_assistant.utils.sse import (
    clean_answer,
    extract_follow_ups,
    iter_sse_messages,
    parse_sse_response,
    split_follow_ups,
)

from .conftest import sse_body


class TestParseSSEResponse:
    """Tests for turning a buffered SSE body into answer text."""

    def test_concatenates_json_data_in_line_order(self):
        """Test that well-formed events are joined with no separator."""
        body = sse_body("钉钉", "机器人 ", "can send ", "cards.")
        assert parse_sse_response(body) == "钉钉机器人 can send cards."

    def test_non_json_payloads_are_appended_verbatim(self):
        """Test that malformed event lines contribute their raw payload."""
        body = 'data: {"data": "Hello "}\ndata: not json at all\ndata: {"data": "!"}\n'
        assert parse_sse_response(body) == "Hello not json at all!"

    def test_ignores_non_data_lines_and_empty_payloads(self):
        """Test that other SSE fields, comments and empty data lines are skipped."""
        body = 'event: message\nid: 1\n: keep-alive\ndata:\ndata:   \ndata: {"data": "ok"}\nretry: 100\n'
        assert parse_sse_response(body) == "ok"

    def test_skips_events_without_data(self):
        """Test that JSON events with no data text add nothing."""
        body = 'data: {"type": "start"}\ndata: {"data": ""}\ndata: {"data": "answer"}\ndata: {"type": "end"}\n'
        assert parse_sse_response(body) == "answer"

    def test_skips_json_values_that_are_not_objects(self):
        """Test that bare JSON scalars carry no text."""
        body = 'data: 42\ndata: null\ndata: {"data": "x"}\n'
        assert parse_sse_response(body) == "x"

    def test_handles_crlf_line_endings(self):
        """Test that carriage returns are stripped with the payload whitespace."""
        body = 'data: {"data": "a"}\r\n\r\ndata: {"data": "b"}\r\n'
        assert parse_sse_response(body) == "ab"

    def test_empty_body(self):
        """Test that an empty body yields an empty answer."""
        assert parse_sse_response("") == ""


class TestIterSSEMessages:
    """Tests for decoded SSE messages."""

    def test_decodes_type_and_in_dialog(self):
        """Test that message metadata is kept on the decoded message."""
        messages = list(iter_sse_messages('data: {"data": "hi", "type": "text", "inDialog": true}\n'))

        assert len(messages) == 1
        assert messages[0].data == "hi"
        assert messages[0].type == "text"
        assert messages[0].in_dialog is True

    def test_raw_payload_is_marked(self):
        """Test that undecodable payloads become raw messages."""
        messages = list(iter_sse_messages("data: [DONE\n"))
        assert messages[0].type == "raw"
        assert messages[0].data == "[DONE"


class TestFollowUpSplitting:
    """Tests for splitting the trailing follow-up array off an answer."""

    def test_splits_trailing_array(self):
        """Test the common case of an answer immediately followed by an array."""
        text = 'some answer["q1","q2"]'

        assert extract_follow_ups(text) == ["q1", "q2"]
        assert clean_answer(text) == "some answer"

    def test_no_trailing_array(self):
        """Test that text without an array is only trimmed."""
        text = "  just an answer\n"

        assert extract_follow_ups(text) == []
        assert clean_answer(text) == "just an answer"

    def test_chinese_follow_ups(self):
        """Test follow-ups written in Chinese, as the service usually sends them."""
        text = '你可以在开发者后台创建机器人。\n["如何发送消息？","如何配置回调？"]'

        answer, follow_ups = split_follow_ups(text)
        assert answer == "你可以在开发者后台创建机器人。"
        assert follow_ups == ["如何发送消息？", "如何配置回调？"]

    def test_array_must_be_at_the_end(self):
        """Test that an array in the middle of the answer is left alone."""
        text = 'Pass ["a","b"] as the scopes parameter.'

        assert split_follow_ups(text) == (text, [])

    def test_only_the_last_array_is_split(self):
        """Test that earlier arrays stay in the answer."""
        text = 'Use ["x"] here.["q1"]'

        assert split_follow_ups(text) == ('Use ["x"] here.', ["q1"])

    def test_trailing_whitespace_after_array(self):
        """Test that whitespace after the array does not hide it."""
        assert split_follow_ups('answer ["q"]\n\n') == ("answer", ["q"])

    def test_escaped_quotes_inside_questions(self):
        """Test that escaped quotes are decoded as part of the question."""
        answer, follow_ups = split_follow_ups('answer["What is \\"corpId\\"?"]')

        assert answer == "answer"
        assert follow_ups == ['What is "corpId"?']

    def test_undecodable_array_keeps_answer_intact(self):
        """Test that an array with invalid escapes is neither split nor dropped."""
        text = 'answer["bad \\x escape"]'

        assert split_follow_ups(text) == (text, [])

    def test_arrays_of_non_strings_are_not_follow_ups(self):
        """Test that a trailing numeric array stays in the answer."""
        text = "The valid levels are [1,2,3]"

        assert split_follow_ups(text) == (text, [])

    def test_empty_array_is_not_a_follow_up_list(self):
        """Test that an empty trailing array stays in the answer."""
        assert split_follow_ups("Returns []") == ("Returns []", [])
