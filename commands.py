# Keyword classification of inbound chat text

import re
from dataclasses import dataclass
from enum import Enum

ORDER_SUBCOMMANDS = ("open", "submit", "list", "close")


class IntentKind(Enum):
    STATUS = "status"
    MENU_TODAY = "menu_today"
    MENU_TOMORROW = "menu_tomorrow"
    ORDER = "order"
    LEGEND = "legend"
    HELP = "help"
    THANKS = "thanks"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    subcommand: str = ""
    content: str = ""


def keyword_pattern(*words: str) -> re.Pattern:
    """Matches any of the words as a whole word, case-insensitively."""
    alternatives = "|".join(re.escape(w) for w in words)
    return re.compile(rf"(?:^|\W)({alternatives})(?:$|\W)", re.IGNORECASE)


STATUS_PATTERN = keyword_pattern("alive", "running", "up")
TODAY_PATTERN = keyword_pattern("heute", "today", "hunger")
TOMORROW_PATTERN = keyword_pattern("morgen", "tomorrow")
LEGEND_PATTERN = keyword_pattern("legend", "legende", "zusatzstoff", "zusatzstoffe", "nummer", "nummern")
HELP_PATTERN = keyword_pattern("command", "commands", "help")
THANKS_PATTERN = keyword_pattern("dank", "danke", "thank", "thanks")


def order_pattern(bot_name: str) -> re.Pattern:
    subcommands = "|".join(ORDER_SUBCOMMANDS)
    return re.compile(
        rf"@(?i:{re.escape(bot_name)}) order (?P<command>{subcommands})(?: (?P<content>.*))?"
    )


class CommandClassifier:
    """First matching rule wins; the order of `rules` is the precedence."""

    def __init__(self, bot_name: str):
        self.order_regex = order_pattern(bot_name)
        self.rules = [
            (IntentKind.STATUS, STATUS_PATTERN),
            (IntentKind.MENU_TODAY, TODAY_PATTERN),
            (IntentKind.MENU_TOMORROW, TOMORROW_PATTERN),
            (IntentKind.ORDER, self.order_regex),
            (IntentKind.LEGEND, LEGEND_PATTERN),
            (IntentKind.HELP, HELP_PATTERN),
            (IntentKind.THANKS, THANKS_PATTERN),
        ]

    def classify(self, text: str) -> Intent:
        text = text or ""
        for kind, pattern in self.rules:
            if kind is IntentKind.ORDER:
                match = pattern.fullmatch(text.strip())
                if match:
                    return Intent(kind, match.group("command"), (match.group("content") or "").strip())
            elif pattern.search(text):
                return Intent(kind)
        return Intent(IntentKind.UNRECOGNIZED)
