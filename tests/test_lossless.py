# tests/test_lossless.py
"""Tests for the reversible run-length + phrase encoding and the checksum."""

import pytest

from chuk_ai_context_manager.compression.lossless import (
    contains_common_phrase,
    decode,
    encode,
    generate_checksum,
    has_long_runs,
    run_length_decode,
    run_length_encode,
)

ROUND_TRIP_SAMPLES = [
    "",
    "plain text with nothing to squeeze",
    "Hello there, thank you so much!!! Let me know by the way.",
    "Wooooow... I understand. can you help? Thank you",
    "1111 2222 [[[ ]]] \n\n\n\t\t\t end",
    "by the wayyy, thank youuuu",
    "ééé 日本語語語語",
    "----------------------------------------",
]


class TestRunLength:
    def test_runs_of_three_or_more(self):
        assert run_length_encode("aaaa") == "a[4]"
        assert run_length_encode("xxx yyyyyy") == "x[3] y[6]"

    def test_short_runs_untouched(self):
        assert run_length_encode("aa bb") == "aa bb"

    def test_newlines_not_encoded(self):
        assert run_length_encode("\n\n\n") == "\n\n\n"

    def test_decode(self):
        assert run_length_decode("a[4]b") == "aaaab"


class TestPhrases:
    def test_canonical_phrases_substituted(self):
        assert encode("thank you") == "§TY§"
        assert encode("I understand") == "§IU§"
        assert encode("can you help") == "§CYH§"
        assert encode("let me know") == "§LMK§"
        assert encode("by the way") == "§BTW§"

    def test_other_casings_left_alone(self):
        assert encode("Thank You") == "Thank You"

    def test_detection_ignores_case(self):
        assert contains_common_phrase("THANK YOU for that")
        assert contains_common_phrase("By The Way")
        assert not contains_common_phrase("thanks, you")


class TestRoundTrip:
    @pytest.mark.parametrize("text", ROUND_TRIP_SAMPLES)
    def test_decode_restores_original(self, text):
        assert decode(encode(text)) == text

    def test_encoding_shrinks_repetitive_text(self):
        text = "thank you " * 20 + "=" * 50
        assert len(encode(text)) < len(text)

    def test_literal_marker_is_read_as_a_run(self):
        # the format has no escape for text that already looks like a marker
        assert encode("a[12]") == "a[12]"
        assert decode(encode("a[12]")) == "a" * 12
        assert decode(encode("list[3]")) == "listtt"


class TestLongRuns:
    def test_six_identical_characters(self):
        assert has_long_runs("wait!!!!!!")

    def test_five_is_not_enough(self):
        assert not has_long_runs("wait!!!!!")


class TestChecksum:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", "0"),
            ("a", "61"),
            ("ab", "c21"),
            ("hello", "5e918d2"),
            ("Hello World", "-3369657c"),
        ],
    )
    def test_known_values(self, text, expected):
        assert generate_checksum(text) == expected

    def test_differs_for_different_text(self):
        assert generate_checksum("context") != generate_checksum("contexts")
