# Telegram entry point for MensaBot
# Needs config_secret.py with BOT_TOKEN and DEBUG_CHAT_ID


from config_secret import BOT_TOKEN, DEBUG_CHAT_ID

# Optional overrides from config_secret
try:
    from config_secret import FAVORITES
except ImportError:
    from config import FAVORITES_DEFAULT as FAVORITES

try:
    from config_secret import DISPLAY_NAME
except ImportError:
    from config import DISPLAY_NAME_DEFAULT as DISPLAY_NAME

import asyncio
import logging
import os
from logging.handlers import TimedRotatingFileHandler

from telegram import Bot, Message, MessageEntity, ReplyParameters, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest, Forbidden, NetworkError, RetryAfter, TimedOut
from telegram.ext import Application, ContextTypes, MessageHandler, filters
from telegram.request import HTTPXRequest

from config import LOG_DIR
from dispatcher import Dispatcher, InboundEvent, Reply

# Logging: daily rotated file plus console
logger = logging.getLogger()
logger.setLevel(logging.INFO)
os.makedirs(LOG_DIR, exist_ok=True)
log_handler = TimedRotatingFileHandler(
    os.path.join(LOG_DIR, 'bot.log'),
    when="midnight",
    interval=1,
    backupCount=30,
    encoding='utf-8'
)
log_handler.suffix = "%Y-%m-%d"
log_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter('%(message)s'))
console_handler.setLevel(logging.INFO)

logger.handlers.clear()
# httpx logs every Telegram API call at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logger.addHandler(log_handler)
logger.addHandler(console_handler)


def mentioned_ids(message: Message, bot: Bot) -> list[str] | None:
    """Collects mentioned users as ids comparable to the bot's id.

    @username mentions carry no id, so they are kept as the lower-cased
    username, except the bot's own name which is mapped to its id.
    """
    bot_name = (bot.username or "").lower()
    ids: list[str] = []
    entities = message.parse_entities([MessageEntity.MENTION, MessageEntity.TEXT_MENTION])
    for entity, text in entities.items():
        if entity.type == MessageEntity.TEXT_MENTION and entity.user:
            ids.append(str(entity.user.id))
            continue
        name = text.lstrip("@").lower()
        ids.append(str(bot.id) if name == bot_name else name)
    return ids or None


def event_from_message(message: Message, bot: Bot) -> InboundEvent:
    user = message.from_user
    author_name = ""
    if user:
        author_name = user.username or user.full_name
    return InboundEvent(
        author_id=str(user.id) if user else "",
        channel_id=str(message.chat_id),
        message_id=str(message.message_id),
        text=message.text or "",
        mentioned_ids=mentioned_ids(message, bot),
        origin_channel_id=str(message.chat_id),
        author_name=author_name,
    )


async def send_reply(bot: Bot, reply: Reply) -> None:
    reply_parameters = None
    if reply.thread_parent_id:
        reply_parameters = ReplyParameters(
            message_id=int(reply.thread_parent_id),
            allow_sending_without_reply=True,
        )
    await bot.send_message(
        chat_id=int(reply.channel_id),
        text=reply.text,
        parse_mode=ParseMode.HTML,
        reply_parameters=reply_parameters,
    )


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    message = update.effective_message
    if not message or not message.text:
        return
    dispatcher: Dispatcher = context.bot_data["dispatcher"]
    await dispatcher.handle(event_from_message(message, context.bot))


async def post_init(application: Application) -> None:
    bot = application.bot
    me = await bot.get_me()
    # Unknown debug chat is fatal, the bot would have nowhere to report
    chat = await bot.get_chat(DEBUG_CHAT_ID)
    logging.info(f"Logged in as @{me.username} ({me.id}), debug chat: {chat.title or chat.id}")

    async def send(reply: Reply) -> None:
        await send_reply(bot, reply)

    dispatcher = Dispatcher(
        bot_id=str(me.id),
        bot_name=me.username,
        debug_channel_id=str(chat.id),
        send=send,
        favorites=FAVORITES,
        display_name=DISPLAY_NAME,
    )
    application.bot_data["dispatcher"] = dispatcher
    await dispatcher.announce_start()


async def post_stop(application: Application) -> None:
    dispatcher = application.bot_data.get("dispatcher")
    if dispatcher:
        await dispatcher.announce_stop()


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    err = context.error
    if isinstance(err, (NetworkError, TimedOut)):
        logging.warning(f"Network issue: {err}")
        return
    if isinstance(err, RetryAfter):
        ra = getattr(err, 'retry_after', 1)
        logging.warning(f"Rate limited, retry after {ra}s")
        await asyncio.sleep(float(ra) if ra else 1)
        return
    if isinstance(err, Forbidden):
        logging.info(f"Forbidden: {err}")
        return
    if isinstance(err, BadRequest):
        logging.warning(f"BadRequest: {err}")
        return
    logging.error("Unhandled exception", exc_info=err)


def build_application() -> Application:
    request = HTTPXRequest(
        connect_timeout=10,
        read_timeout=80,
        write_timeout=10,
        pool_timeout=5,
    )
    application = (
        Application
        .builder()
        .token(BOT_TOKEN)
        .request(request)
        .concurrent_updates(True)
        .post_init(post_init)
        .post_stop(post_stop)
        .build()
    )
    application.add_error_handler(error_handler)
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
    return application


if __name__ == "__main__":
    build_application().run_polling(allowed_updates=Update.ALL_TYPES)
