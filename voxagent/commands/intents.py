"""
Built-in intents.

The order of :data:`DEFAULT_RULES` is significant: e.g. "play video" has to
be claimed by the video rule before the music rule sees the bare "play".
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Tuple
from urllib.parse import quote

from .. import config
from .command_router import CommandContext, CommandOutcome, CommandRouter, IntentRule

HELP_TEXT = (
    "I can help you navigate, play videos and music, search the web, check weather, "
    "time, date, open email, calculator, calendar, and much more. Just ask me!"
)
FALLBACK_TEXT = (
    "I heard you, but I'm not sure what to do. "
    "Try asking me to navigate, play a video, or search for something."
)

# Label and example text offered by the UI as one-click commands.
CAPABILITIES: List[Tuple[str, str]] = [
    ("Navigation", "Navigate to Central Park"),
    ("Videos", "Play video funny cats"),
    ("Music", "Play song Bohemian Rhapsody"),
    ("Search", "Search for best restaurants"),
    ("Weather", "What's the weather today"),
    ("Email", "Open email"),
    ("Calculator", "Calculate 25 times 4"),
    ("Calendar", "Open calendar"),
]


def encode_component(text: str) -> str:
    """Percent-encode ``text`` like a browser's ``encodeURIComponent``."""
    return quote(text, safe="!~*'()")


def format_time(now: datetime) -> str:
    """``3:04:05 PM`` style clock time."""
    return f"{now.hour % 12 or 12}:{now:%M:%S %p}"


def format_date(now: datetime) -> str:
    """``Monday, October 19, 2026`` style long date."""
    return f"{now:%A}, {now:%B} {now.day}, {now.year}"


def _navigate(ctx: CommandContext) -> CommandOutcome:
    place = ctx.argument
    return CommandOutcome(
        intent="navigate",
        argument=place,
        action=f"Opening Google Maps for: {place}",
        speech=f"Navigating to {place}",
        url=config.MAPS_SEARCH_URL.format(query=encode_component(place)),
    )


def _video(ctx: CommandContext) -> CommandOutcome:
    query = ctx.argument
    return CommandOutcome(
        intent="video",
        argument=query,
        action=f"Searching YouTube for: {query}",
        speech=f"Playing {query} on YouTube",
        url=config.VIDEO_SEARCH_URL.format(query=encode_component(query)),
    )


def _music(ctx: CommandContext) -> CommandOutcome:
    song = ctx.argument
    return CommandOutcome(
        intent="music",
        argument=song,
        action=f"Playing music: {song}",
        speech=f"Playing {song}",
        url=config.VIDEO_SEARCH_URL.format(query=encode_component(f"{song} song")),
    )


def _search(ctx: CommandContext) -> CommandOutcome:
    query = ctx.argument
    return CommandOutcome(
        intent="search",
        argument=query,
        action=f"Searching for: {query}",
        speech=f"Searching for {query}",
        url=config.WEB_SEARCH_URL.format(query=encode_component(query)),
    )


def _time(ctx: CommandContext) -> CommandOutcome:
    time_text = format_time(ctx.now)
    return CommandOutcome(
        intent="time",
        argument="",
        action=f"Current time: {time_text}",
        speech=f"The current time is {time_text}",
    )


def _date(ctx: CommandContext) -> CommandOutcome:
    date_text = format_date(ctx.now)
    return CommandOutcome(
        intent="date",
        argument="",
        action=f"Today is: {date_text}",
        speech=f"Today is {date_text}",
    )


def _weather(ctx: CommandContext) -> CommandOutcome:
    location = ctx.argument
    return CommandOutcome(
        intent="weather",
        argument=location,
        action=f"Getting weather for: {location}",
        speech="Opening weather information",
        url=config.WEB_SEARCH_URL.format(query="weather+" + encode_component(location)),
    )


def _email(ctx: CommandContext) -> CommandOutcome:
    return CommandOutcome(
        intent="email",
        argument="",
        action="Opening email",
        speech="Opening your email",
        url=config.MAIL_URL,
    )


def _calculator(ctx: CommandContext) -> CommandOutcome:
    expression = ctx.argument
    return CommandOutcome(
        intent="calculator",
        argument=expression,
        action=f"Opening calculator for: {expression}",
        speech="Opening calculator",
        url=config.WEB_SEARCH_URL.format(query=encode_component(expression)),
    )


def _calendar(ctx: CommandContext) -> CommandOutcome:
    return CommandOutcome(
        intent="calendar",
        argument="",
        action="Opening calendar",
        speech="Opening your calendar",
        url=config.CALENDAR_URL,
    )


def _news(ctx: CommandContext) -> CommandOutcome:
    topic = ctx.argument
    if topic:
        action = f"Getting news about: {topic}"
        url = config.NEWS_SEARCH_URL.format(query=encode_component(topic))
    else:
        action = "Opening news"
        url = config.NEWS_URL
    return CommandOutcome(intent="news", argument=topic, action=action, speech="Opening news", url=url)


def _help(ctx: CommandContext) -> CommandOutcome:
    return CommandOutcome(
        intent="help",
        argument="",
        action="Showing available commands",
        speech=HELP_TEXT,
    )


def _fallback(ctx: CommandContext) -> CommandOutcome:
    # The label echoes what was heard, not the normalized form.
    return CommandOutcome(
        intent="fallback",
        argument="",
        action=f"Command received: {ctx.text}",
        speech=FALLBACK_TEXT,
    )


DEFAULT_RULES: List[IntentRule] = [
    IntentRule(
        "navigate",
        ("navigate", "directions", "map"),
        _navigate,
        strip=("navigate to", "directions to", "show map of", "map of", "navigate", "directions", "map"),
    ),
    IntentRule(
        "video",
        ("play video", "youtube"),
        _video,
        strip=("play video", "youtube", "on youtube", "video"),
    ),
    IntentRule(
        "music",
        ("play song", "play music", "listen to"),
        _music,
        strip=("play song", "play music", "listen to", "play"),
    ),
    IntentRule(
        "search",
        ("search for", "google"),
        _search,
        strip=("search for", "google", "search"),
    ),
    IntentRule("time", ("what time", "current time"), _time),
    IntentRule("date", ("what date", "today"), _date),
    IntentRule(
        "weather",
        ("weather",),
        _weather,
        strip=("weather in", "weather at", "weather", "what's the"),
        default_argument="current location",
    ),
    IntentRule("email", ("open email", "check email"), _email),
    IntentRule(
        "calculator",
        ("calculate", "calculator"),
        _calculator,
        strip=("calculate", "calculator", "what is", "what's"),
    ),
    IntentRule("calendar", ("calendar", "schedule"), _calendar),
    IntentRule("news", ("news",), _news, strip=("news about", "news on", "news")),
    IntentRule("help", ("help", "what can you do"), _help),
]

FALLBACK_RULE = IntentRule("fallback", (), _fallback)


def build_default_router() -> CommandRouter:
    """Return a router loaded with the built-in rule table."""
    return CommandRouter(FALLBACK_RULE, DEFAULT_RULES)
