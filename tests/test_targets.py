"""
tests/test_targets.py — Target Extraction Tests
================================================
"""

from __future__ import annotations

import pytest

from plusplus.engine.targets import (
    EmojiTarget,
    UserTarget,
    extract_emoji_name,
    extract_target,
    extract_user_id,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("<@U123456>++", "U123456"),
        ("Hello world", ""),
        ("<U123456>++", ""),
        ("<@U1> and <@U2>++", "U1"),
    ],
)
def test_extract_user_id(text, expected):
    assert extract_user_id(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        (":sake: ++", "sake"),
        (":beer_mug: ++", "beer_mug"),
        (":beer2: ++", "beer2"),
        (":+1: ++", "+1"),
        ("Hello world", ""),
        (":sake ++", ""),
    ],
)
def test_extract_emoji_name(text, expected):
    assert extract_emoji_name(text) == expected


class TestExtractTarget:
    def test_user_mention(self):
        assert extract_target("<@U123456>++") == UserTarget("U123456")

    def test_emoji(self):
        assert extract_target(":sake: ++") == EmojiTarget("sake")

    def test_no_target(self):
        assert extract_target("Hello world") is None

    def test_user_mention_has_priority(self):
        assert extract_target("<@U123456> :sake: ++") == UserTarget("U123456")

    def test_user_mention_wins_even_after_emoji(self):
        assert extract_target(":sake: ++ thanks <@U99>") == UserTarget("U99")

    def test_first_emoji_only(self):
        assert extract_target(":tea: :sake: ++") == EmojiTarget("tea")


class TestTargetProperties:
    def test_user_target(self):
        target = UserTarget("U1")
        assert target.key == "U1"
        assert target.is_user
        assert target.mention == "<@U1>"

    def test_emoji_target(self):
        target = EmojiTarget("sake")
        assert target.key == "sake"
        assert not target.is_user
        assert target.mention == ":sake:"
