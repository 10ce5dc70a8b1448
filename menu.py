# Canteen plan scraping: HTML page -> list of Dish

import logging
import re
from dataclasses import dataclass
from typing import Iterable

import httpx
from bs4 import BeautifulSoup

from config import FETCH_TIMEOUT

DISH_CLASS = "dish-description"
PRICE_CLASS = "price"
PRICE_TIERS = 3

# img title (lower-cased) -> Dish flag
FLAG_TITLES = {
    "vegetarisch": "vegetarian",
    "vegan": "vegan",
    "mit rind": "beef",
    "mit schwein": "pork",
    "mit fisch": "fish",
    "mit geflügel": "chicken",
    "laktosefrei": "lactose_free",
}


class MenuFetchError(Exception):
    """The canteen plan could not be downloaded or parsed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class Dish:
    name: str
    prices: tuple[str, str, str] = ("", "", "")
    vegetarian: bool = False
    vegan: bool = False
    beef: bool = False
    pork: bool = False
    fish: bool = False
    chicken: bool = False
    lactose_free: bool = False

    def __post_init__(self):
        prices = tuple(self.prices)[:PRICE_TIERS]
        prices += ("",) * (PRICE_TIERS - len(prices))
        object.__setattr__(self, "prices", prices)
        # vegan always implies vegetarian
        if self.vegan:
            object.__setattr__(self, "vegetarian", True)

    def is_favorite(self, favorites: Iterable[str]) -> bool:
        name = self.name.lower()
        return any(f and f.lower() in name for f in favorites)


def normalize_name(text: str) -> str:
    name = re.sub(r"\s+", " ", text).strip()
    name = re.sub(r"\(\s+", "(", name)
    name = re.sub(r"\s+([,)])", r"\1", name)
    return name


def _price_text(node) -> str:
    return node.get_text().replace("\xa0", "").strip()


def dish_from_node(node) -> Dish:
    name = normalize_name(node.get_text(" "))

    container = node.parent if node.parent is not None else node
    prices = [_price_text(p) for p in container.find_all(class_=PRICE_CLASS)[:PRICE_TIERS]]

    flags = {}
    for img in node.find_all("img"):
        flag = FLAG_TITLES.get((img.get("title") or "").lower())
        if flag:
            flags[flag] = True

    return Dish(name=name, prices=tuple(prices), **flags)


def parse_canteen_plan(document: str) -> list[Dish]:
    soup = BeautifulSoup(document, "html.parser")
    return [dish_from_node(node) for node in soup.find_all(class_=DISH_CLASS)]


async def fetch_canteen_plan(
    url: str,
    timeout: float = FETCH_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Dish]:
    """Downloads and parses a canteen plan page.

    Raises MenuFetchError on any network, HTTP status or parse problem,
    so callers get either the complete list or a single error.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        raise MenuFetchError(url, str(e) or e.__class__.__name__) from e

    try:
        dishes = parse_canteen_plan(response.text)
    except Exception as e:
        raise MenuFetchError(url, f"parse error: {e}") from e

    logging.info(f"Fetched {len(dishes)} dishes from {url}")
    return dishes
