"""Tests for voxagent.commands: rule table, ordering and argument extraction."""

from datetime import datetime

import pytest

from conftest import FIXED_NOW
from voxagent.commands import CommandOutcome, CommandRouter, IntentRule
from voxagent.commands.intents import (
    DEFAULT_RULES,
    FALLBACK_TEXT,
    HELP_TEXT,
    encode_component,
    format_date,
    format_time,
)


def route(router, text):
    return router.route(text, FIXED_NOW)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


def test_rule_order():
    assert [rule.name for rule in DEFAULT_RULES] == [
        "navigate",
        "video",
        "music",
        "search",
        "time",
        "date",
        "weather",
        "email",
        "calculator",
        "calendar",
        "news",
        "help",
    ]


class TestNavigate:
    def test_navigate_to(self, router):
        outcome = route(router, "Navigate to Central Park")
        assert outcome.intent == "navigate"
        assert outcome.argument == "central park"
        assert outcome.action == "Opening Google Maps for: central park"
        assert outcome.speech == "Navigating to central park"
        assert outcome.url == "https://www.google.com/maps/search/central%20park"

    def test_show_map_of(self, router):
        outcome = route(router, "show map of Paris")
        assert outcome.argument == "paris"

    def test_directions_to(self, router):
        outcome = route(router, "directions to the airport")
        assert outcome.argument == "the airport"


class TestVideoAndMusic:
    def test_play_video(self, router):
        outcome = route(router, "Play video funny cats")
        assert outcome.intent == "video"
        assert outcome.argument == "funny cats"
        assert outcome.action == "Searching YouTube for: funny cats"
        assert outcome.speech == "Playing funny cats on YouTube"
        assert outcome.url == "https://www.youtube.com/results?search_query=funny%20cats"

    def test_on_youtube_is_stripped(self, router):
        assert route(router, "cooking recipes on youtube").argument == "cooking recipes"

    def test_play_song(self, router):
        outcome = route(router, "Play song Bohemian Rhapsody")
        assert outcome.intent == "music"
        assert outcome.argument == "bohemian rhapsody"
        assert outcome.action == "Playing music: bohemian rhapsody"
        assert outcome.speech == "Playing bohemian rhapsody"
        assert outcome.url == "https://www.youtube.com/results?search_query=bohemian%20rhapsody%20song"

    def test_listen_to(self, router):
        outcome = route(router, "listen to hotel california")
        assert outcome.intent == "music"
        assert outcome.argument == "hotel california"

    def test_video_rule_claims_play_music_on_youtube(self, router):
        assert route(router, "play music on youtube").intent == "video"

    def test_bare_play_is_not_music(self, router):
        assert route(router, "play something").intent == "fallback"


class TestSearch:
    def test_search_for(self, router):
        outcome = route(router, "Search for best restaurants")
        assert outcome.intent == "search"
        assert outcome.argument == "best restaurants"
        assert outcome.action == "Searching for: best restaurants"
        assert outcome.speech == "Searching for best restaurants"
        assert outcome.url == "https://www.google.com/search?q=best%20restaurants"

    def test_google(self, router):
        assert route(router, "google python decorators").argument == "python decorators"


class TestTimeAndDate:
    def test_what_time(self, router):
        outcome = route(router, "what time")
        assert outcome.intent == "time"
        assert outcome.action == "Current time: 3:04:05 PM"
        assert outcome.speech == "The current time is 3:04:05 PM"
        assert outcome.url is None

    def test_what_time_is_it(self, router):
        assert route(router, "What time is it").intent == "time"

    def test_time_without_trigger_phrase_does_not_match(self, router):
        assert route(router, "tell me the time").intent == "fallback"

    def test_today(self, router):
        outcome = route(router, "what is today")
        assert outcome.intent == "date"
        assert outcome.action == "Today is: Monday, October 19, 2026"
        assert outcome.speech == "Today is Monday, October 19, 2026"
        assert outcome.url is None


class TestWeather:
    def test_weather_in(self, router):
        outcome = route(router, "weather in Paris")
        assert outcome.intent == "weather"
        assert outcome.argument == "paris"
        assert outcome.action == "Getting weather for: paris"
        assert outcome.speech == "Opening weather information"
        assert outcome.url == "https://www.google.com/search?q=weather+paris"

    def test_whats_the_weather_in(self, router):
        assert route(router, "What's the weather in London").argument == "london"

    def test_empty_location_defaults_to_current_location(self, router):
        outcome = route(router, "weather")
        assert outcome.argument == "current location"
        assert outcome.url == "https://www.google.com/search?q=weather+current%20location"

    def test_date_rule_wins_over_weather_today(self, router):
        assert route(router, "What's the weather today").intent == "date"


class TestFixedDestinations:
    def test_open_email(self, router):
        outcome = route(router, "Open email")
        assert outcome.intent == "email"
        assert outcome.action == "Opening email"
        assert outcome.speech == "Opening your email"
        assert outcome.url == "https://mail.google.com"

    def test_check_email(self, router):
        assert route(router, "check email please").intent == "email"

    def test_calendar(self, router):
        outcome = route(router, "Open calendar")
        assert outcome.intent == "calendar"
        assert outcome.action == "Opening calendar"
        assert outcome.speech == "Opening your calendar"
        assert outcome.url == "https://calendar.google.com"

    def test_schedule(self, router):
        assert route(router, "show my schedule").intent == "calendar"


class TestCalculator:
    def test_calculate(self, router):
        outcome = route(router, "Calculate 25 times 4")
        assert outcome.intent == "calculator"
        assert outcome.argument == "25 times 4"
        assert outcome.action == "Opening calculator for: 25 times 4"
        assert outcome.speech == "Opening calculator"
        assert outcome.url == "https://www.google.com/search?q=25%20times%204"

    def test_what_is_is_stripped(self, router):
        assert route(router, "calculator what is 7 plus 5").argument == "7 plus 5"


class TestNews:
    def test_news_about_topic(self, router):
        outcome = route(router, "news about elections")
        assert outcome.intent == "news"
        assert outcome.action == "Getting news about: elections"
        assert outcome.speech == "Opening news"
        assert outcome.url == "https://news.google.com/search?q=elections"

    def test_plain_news(self, router):
        outcome = route(router, "News")
        assert outcome.action == "Opening news"
        assert outcome.url == "https://news.google.com"


class TestHelpAndFallback:
    @pytest.mark.parametrize("text", ["help", "What can you do"])
    def test_help(self, router, text):
        outcome = route(router, text)
        assert outcome.intent == "help"
        assert outcome.action == "Showing available commands"
        assert outcome.speech == HELP_TEXT
        assert outcome.url is None

    def test_fallback_keeps_original_text(self, router):
        outcome = route(router, "Asdkjf Random Text")
        assert outcome.intent == "fallback"
        assert outcome.action == "Command received: Asdkjf Random Text"
        assert "not sure what to do" in outcome.speech
        assert outcome.speech == FALLBACK_TEXT
        assert outcome.url is None


# ---------------------------------------------------------------------------
# Priority: first match wins
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, intent",
    [
        ("search for directions to the zoo", "navigate"),
        ("youtube search for cats", "video"),
        ("what time is the news on", "time"),
        ("google the weather", "search"),
        ("help me calculate 3 plus 4", "calculator"),
        ("roadmap", "navigate"),
    ],
)
def test_first_matching_rule_wins(router, text, intent):
    assert route(router, text).intent == intent


def test_classify_returns_fallback_when_nothing_matches(router):
    assert router.classify("hello there") is router.fallback


# ---------------------------------------------------------------------------
# Custom rules
# ---------------------------------------------------------------------------


def _echo(ctx):
    return CommandOutcome(intent="echo", argument=ctx.argument, action=ctx.argument, speech=ctx.argument)


def test_add_rule_has_lowest_priority():
    fallback = IntentRule("fallback", (), _echo)
    router = CommandRouter(fallback, [IntentRule("first", ("say",), _echo, strip=("say",))])
    router.add_rule(IntentRule("second", ("say", "shout"), _echo))
    assert router.classify("say hi").name == "first"
    assert router.classify("shout hi").name == "second"
    assert [rule.name for rule in router.rules] == ["first", "second"]


def test_extract_strips_every_occurrence_case_insensitively():
    rule = IntentRule("echo", ("say",), _echo, strip=("say",))
    assert rule.extract("say hello SAY world") == "hello  world"


def test_extract_default_argument():
    rule = IntentRule("echo", ("say",), _echo, strip=("say",), default_argument="nothing")
    assert rule.extract("say") == "nothing"


def test_rule_without_strip_phrases_has_empty_argument():
    rule = IntentRule("echo", ("say",), _echo)
    assert rule.extract("say hello") == ""


def test_rule_without_strip_phrases_uses_default_argument():
    rule = IntentRule("echo", ("say",), _echo, default_argument="nothing")
    assert rule.extract("say hello") == "nothing"


def test_route_passes_original_and_normalized_text():
    seen = []

    def capture(ctx):
        seen.append(ctx)
        return _echo(ctx)

    router = CommandRouter(IntentRule("fallback", (), capture))
    router.route("  Hello World ", datetime(2026, 1, 1))
    assert seen[0].text == "  Hello World "
    assert seen[0].normalized == "hello world"
    assert seen[0].now == datetime(2026, 1, 1)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def test_encode_component_matches_browser_encoding():
    assert encode_component("a b&c/d?") == "a%20b%26c%2Fd%3F"
    assert encode_component("it's (fun)!") == "it's%20(fun)!"


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2026, 10, 19, 15, 4, 5), "3:04:05 PM"),
        (datetime(2026, 10, 19, 0, 5, 9), "12:05:09 AM"),
        (datetime(2026, 10, 19, 12, 0, 0), "12:00:00 PM"),
    ],
)
def test_format_time(moment, expected):
    assert format_time(moment) == expected


def test_format_date():
    assert format_date(datetime(2026, 3, 1)) == "Sunday, March 1, 2026"
