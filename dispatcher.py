# Routing of inbound chat messages to handlers, one reply per accepted message

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

import messages
from commands import CommandClassifier, Intent, IntentKind
from config import CANTEEN_URL_TODAY, CANTEEN_URL_TOMORROW, DISPLAY_NAME_DEFAULT, MAX_MENTIONS, VERSION
from menu import Dish, MenuFetchError, fetch_canteen_plan
from orders import OrderLedger


@dataclass(frozen=True)
class InboundEvent:
    author_id: str
    channel_id: str
    message_id: str
    text: str
    # None when the platform reported no mentions at all
    mentioned_ids: Optional[list[str]] = None
    origin_channel_id: str = ""
    author_name: str = ""


@dataclass(frozen=True)
class Reply:
    text: str
    channel_id: str
    thread_parent_id: Optional[str] = None


SendFunc = Callable[[Reply], Awaitable[None]]
FetchMenuFunc = Callable[[str], Awaitable[list[Dish]]]


class Dispatcher:
    def __init__(
        self,
        bot_id: str,
        bot_name: str,
        debug_channel_id: str,
        send: SendFunc,
        fetch_menu: FetchMenuFunc = fetch_canteen_plan,
        favorites: Iterable[str] = (),
        today_url: str = CANTEEN_URL_TODAY,
        tomorrow_url: str = CANTEEN_URL_TOMORROW,
        max_mentions: int = MAX_MENTIONS,
        display_name: str = DISPLAY_NAME_DEFAULT,
        ledger: Optional[OrderLedger] = None,
    ):
        self.bot_id = bot_id
        self.bot_name = bot_name
        self.debug_channel_id = debug_channel_id
        self.send = send
        self.fetch_menu = fetch_menu
        self.favorites = [f.lower() for f in favorites]
        self.today_url = today_url
        self.tomorrow_url = tomorrow_url
        self.max_mentions = max_mentions
        self.display_name = display_name
        self.ledger = ledger if ledger is not None else OrderLedger()
        self.classifier = CommandClassifier(bot_name)
        # user id -> display name, filled from inbound events
        self.user_names: dict[str, str] = {bot_id: bot_name}

    def accepts(self, event: InboundEvent) -> bool:
        if event.author_id == self.bot_id:
            return False
        if event.mentioned_ids is not None:
            if len(event.mentioned_ids) > self.max_mentions:
                return False
            return self.bot_id in event.mentioned_ids
        return event.origin_channel_id == self.debug_channel_id

    async def handle(self, event: InboundEvent) -> Optional[Reply]:
        if not self.accepts(event):
            logging.debug(f"Ignoring message {event.message_id} in {event.channel_id}")
            return None

        if event.author_name:
            self.user_names[event.author_id] = event.author_name

        intent = self.classifier.classify(event.text)
        logging.info(f"User {event.author_id} ({event.author_name or '-'}): {intent.kind.value} {intent.subcommand}".rstrip())

        text = await self.reply_text(intent, event)
        reply = Reply(text, event.channel_id, event.message_id)
        await self.send(reply)
        return reply

    async def reply_text(self, intent: Intent, event: InboundEvent) -> str:
        kind = intent.kind
        if kind is IntentKind.STATUS:
            return messages.STATUS_TEXT
        if kind is IntentKind.MENU_TODAY:
            return await self.menu_text(self.today_url, messages.TODAY_PREFIX)
        if kind is IntentKind.MENU_TOMORROW:
            return await self.menu_text(self.tomorrow_url, messages.TOMORROW_PREFIX)
        if kind is IntentKind.ORDER:
            return self.order_text(intent, event.author_id)
        if kind is IntentKind.LEGEND:
            return messages.LEGEND_TEXT
        if kind is IntentKind.HELP:
            return messages.help_text(self.bot_name)
        if kind is IntentKind.THANKS:
            return messages.thanks_reply()
        return messages.UNRECOGNIZED_TEXT

    async def menu_text(self, url: str, prefix: str) -> str:
        try:
            dishes = await self.fetch_menu(url)
        except MenuFetchError as e:
            logging.error(f"Menu unavailable: {e}")
            return messages.MENU_FAILED_TEXT
        return messages.format_dishes(dishes, prefix, self.favorites)

    def order_text(self, intent: Intent, user_id: str) -> str:
        sub = intent.subcommand
        if sub == "open":
            result = self.ledger.open(user_id, intent.content)
        elif sub == "submit":
            result = self.ledger.submit(user_id, intent.content)
        elif sub == "list":
            result = self.ledger.list()
        elif sub == "close":
            result = self.ledger.close(user_id)
        else:
            raise ValueError(f"Unknown order subcommand: {sub}")
        return messages.order_reply(sub, result, self.user_names)

    async def announce_start(self) -> None:
        await self.send(Reply(messages.started_text(self.display_name, VERSION), self.debug_channel_id))

    async def announce_stop(self) -> None:
        await self.send(Reply(messages.stopped_text(self.display_name, VERSION), self.debug_channel_id))
