# Reply texts. Everything here is sent with ParseMode.HTML, so user text is escaped

import html
import random
from typing import Iterable, Mapping

from menu import Dish
from orders import OrderResult, Outcome

FAVORITE = "😍"
VEGAN = "🌻"
VEGETARIAN = "🥕"
BEEF = "🐄"
PORK = "🐖"
FISH = "🐟"
CHICKEN = "🐓"
LACTOSE_FREE = "🥛"

PRICE_SEPARATOR = " // "

DISHES_HEADER = "| Essen | Features | Preise |\n| -- | -- | -- |"
ORDERS_HEADER = "| User | Order |\n| -- | -- |"

TODAY_PREFIX = "<b>Heute gibt es:</b>"
TOMORROW_PREFIX = "<b>Morgen gibt es:</b>"

STATUS_TEXT = "Yes I'm up and running!"
UNRECOGNIZED_TEXT = "<b>What does this even mean?!</b> (Type 'help' to get a list of available commands)"
MENU_FAILED_TEXT = "Sorry, I couldn't fetch the menu right now. Please try again later."

THANKS_REPLIES = ("My pleasure", "You are very welcome", "Dafür nicht", "Immer gern")

LEGEND_TEXT = (
    "<b>Legende:</b>\n"
    f"{FAVORITE} = Lieblingsgericht\n"
    f"{VEGAN} = Veganes Gericht\n"
    f"{VEGETARIAN} = Vegetarisches Gericht\n"
    f"{BEEF} = Enthält Rindfleisch\n"
    f"{PORK} = Enthält Schweinefleisch\n"
    f"{FISH} = Enthält Fisch\n"
    f"{CHICKEN} = Enthält Geflügel\n"
    f"{LACTOSE_FREE} = Laktose<b>freies</b>(!) Gericht\n\n"
    "<b>Zusatzstoffe:</b>\n"
    "1 = Farbstoffe\n"
    "2 = Konservierungsstoffe\n"
    "3 = Antioxidationsmittel\n"
    "4 = Geschmacksverstärker\n"
    "5 = Geschwefelt\n"
    "6 = Geschwärzt\n"
    "7 = Gewachst\n"
    "8 = Phosphat\n"
    "9 = Süßungsmittel\n"
    "10 = Phenylalaninquelle\n"
    "14 = enthält glutenhaltiges Getreide (z. B. Weizen, Roggen, Gerste etc.)\n"
    "15 = Krebstiere und Krebstiererzeugnisse\n"
    "16 = Ei und Eierzeugnisse\n"
    "17 = Fisch und Fischerzeugnisse\n"
    "18 = Erdnüsse und Erdnusserzeugnisse\n"
    "19 = Soja und Sojaerzeugnisse\n"
    "20 = Milch und Milcherzeugnisse (einschl. Laktose)\n"
    "21 = Schalenfrüchte (z.B. Mandel, Haselnüsse, Walnuss etc.)\n"
    "22 = Sellerie und Sellerieerzeugnisse\n"
    "23 = Senf und Senferzeugnisse\n"
    "24 = Sesamsamen und Sesamsamenerzeugnisse\n"
    "25 = Schwefeldioxid und Sulfite (Konzentration über 10mg/kg oder 10mg/l)\n"
    "26 = Lupine und - erzeugnisse\n"
    "27 = Mollusken/Weichtiere (z.B. Muscheln und Weinbergschnecken)\n"
)


def help_text(bot_name: str) -> str:
    mention = html.escape(f"@{bot_name}")
    return (
        "<b>Need help?</b> These are my supported commands:\n\n"
        "| Command | Keyword(s) (completely case insensitive) |\n"
        "| -- | -- |\n"
        "| Status | alive, running, up |\n"
        "| Today's canteen plan | heute, today, hunger |\n"
        "| Tomorrow's canteen plan | morgen, tomorrow |\n"
        f"| Order controls | {mention} order [open, submit, list, close] ... |\n"
        "| Legend | legend(e), zusatzstoff(e), nummer(n) |\n"
        "| This help message | command(s), help |\n"
    )


def started_text(display_name: str, version: str) -> str:
    return f"<i>[{html.escape(display_name)} {html.escape(version)}] has <b>started</b> running</i>"


def stopped_text(display_name: str, version: str) -> str:
    return f"<i>[{html.escape(display_name)} {html.escape(version)}] has <b>stopped</b> running</i>"


def thanks_reply() -> str:
    return random.choice(THANKS_REPLIES)


def format_dish(dish: Dish, favorites: Iterable[str] = ()) -> str:
    markers = []
    if dish.is_favorite(favorites):
        markers.append(FAVORITE)
    if dish.vegan:
        markers.append(VEGAN)
    elif dish.vegetarian:
        markers.append(VEGETARIAN)
    if dish.beef:
        markers.append(BEEF)
    if dish.pork:
        markers.append(PORK)
    if dish.fish:
        markers.append(FISH)
    if dish.chicken:
        markers.append(CHICKEN)
    if dish.lactose_free:
        markers.append(LACTOSE_FREE)

    features = "".join(f" {m}" for m in markers)
    prices = PRICE_SEPARATOR.join(html.escape(p) for p in dish.prices)
    return f"| {html.escape(dish.name)} |{features} | {prices} |"


def format_dishes(dishes: Iterable[Dish], prefix: str, favorites: Iterable[str] = ()) -> str:
    favorites = list(favorites)
    lines = [prefix, "", DISHES_HEADER]
    lines.extend(format_dish(d, favorites) for d in dishes)
    return "\n".join(lines) + "\n"


def _user(user_id: str, names: Mapping[str, str]) -> str:
    return html.escape("@" + (names.get(user_id) or user_id))


def _order_table(result: OrderResult, names: Mapping[str, str]) -> str:
    rows = [ORDERS_HEADER]
    for user_id, item in result.submissions:
        rows.append(f"| {_user(user_id, names)} | {html.escape(item)} |")
    return "\n".join(rows) + "\n"


NO_ACTIVE_ORDER_TEXTS = {
    "submit": "Cannot submit without active order",
    "list": "Cannot list without active order",
    "close": "Cannot close without active order",
}


def order_reply(subcommand: str, result: OrderResult, names: Mapping[str, str]) -> str:
    """Renders the reply for an order sub-command result."""
    outcome = result.outcome
    if outcome is Outcome.OPENED:
        return f"#FoodOrder opened by {_user(result.owner, names)}: {html.escape(result.description)}"
    if outcome is Outcome.UPDATED:
        return f"Updated order details: {html.escape(result.description)}"
    if outcome is Outcome.NOT_OVERWRITING:
        return f"Not overwriting active order of {_user(result.owner, names)}"
    if outcome is Outcome.MISSING_DESCRIPTION:
        return "Cannot open an order without a description"
    if outcome is Outcome.SUBMITTED:
        user_id, item = result.submissions[0]
        return f"Added to the order for {_user(user_id, names)}: {html.escape(item)}"
    if outcome is Outcome.NOTHING_TO_SUBMIT:
        return "Nothing to submit, tell me what you want to order"
    if outcome is Outcome.NO_ACTIVE_ORDER:
        return NO_ACTIVE_ORDER_TEXTS.get(subcommand, "There is no active order")
    if outcome is Outcome.LISTED:
        return f"<b>[Active order]</b> {html.escape(result.description)}\n\n" + _order_table(result, names)
    if outcome is Outcome.CLOSED:
        return "<b>Closing</b> active order:\n\n" + _order_table(result, names)
    if outcome is Outcome.NOT_OWNER:
        return f"Only {_user(result.owner, names)} can close the active order"
    raise ValueError(f"Unknown order outcome: {outcome}")
