import asyncio

import httpx
import pytest

from menu import Dish, MenuFetchError, fetch_canteen_plan, normalize_name, parse_canteen_plan

PLAN_HTML = """
<html><body><table>
<tr class="dish">
  <td class="dish-description">
    Gemüse-Lasagne   ( 3, 9 ) mit Salat
    <img src="v.png" title="Vegetarisch">
    <img src="l.png" title="laktosefrei">
  </td>
  <td class="price">2,50\xa0€</td>
  <td class="price">3,95\xa0€</td>
  <td class="price">4,95\xa0€</td>
</tr>
<tr class="dish">
  <td class="dish-description">
    Tofu-Curry , Reis
    <img src="vg.png" title="VEGAN">
    <img src="x.png" title="mit Sonnenschein">
  </td>
  <td class="price">1,90\xa0€</td>
</tr>
<tr class="dish">
  <td class="dish-description">
    Hähnchenschnitzel
    <img src="c.png" title="mit Geflügel">
    <img src="s.png" title="mit Schwein">
    <img src="r.png" title="mit Rind">
    <img src="f.png" title="mit Fisch">
  </td>
</tr>
</table></body></html>
"""


def test_parse_keeps_document_order():
    dishes = parse_canteen_plan(PLAN_HTML)
    assert [d.name for d in dishes] == [
        "Gemüse-Lasagne (3, 9) mit Salat",
        "Tofu-Curry, Reis",
        "Hähnchenschnitzel",
    ]


def test_parse_prices_and_flags():
    lasagne, curry, schnitzel = parse_canteen_plan(PLAN_HTML)

    assert lasagne.prices == ("2,50€", "3,95€", "4,95€")
    assert lasagne.vegetarian and lasagne.lactose_free
    assert not lasagne.vegan

    assert curry.prices == ("1,90€", "", "")
    assert curry.vegan and curry.vegetarian

    assert schnitzel.prices == ("", "", "")
    assert schnitzel.chicken and schnitzel.pork and schnitzel.beef and schnitzel.fish
    assert not schnitzel.vegetarian


def test_empty_document_has_no_dishes():
    assert parse_canteen_plan("<html><body><p>Geschlossen</p></body></html>") == []


@pytest.mark.parametrize("raw, expected", [
    ("  Pasta  ", "Pasta"),
    ("Pasta  mit   Soße", "Pasta mit Soße"),
    ("Suppe ( 1, 2 )", "Suppe (1, 2)"),
    ("Reis , Gemüse", "Reis, Gemüse"),
    ("\n\tEintopf\n (vegan )\n", "Eintopf (vegan)"),
])
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


@pytest.mark.parametrize("raw", [
    "  a ( b ,  c )  ",
    "( ( x ) )",
    "Pasta , , Soße",
    "plain",
])
def test_normalize_name_is_idempotent(raw):
    once = normalize_name(raw)
    assert normalize_name(once) == once


def test_dish_vegan_implies_vegetarian():
    dish = Dish("Salat", vegan=True, vegetarian=False)
    assert dish.vegetarian


def test_dish_prices_have_fixed_arity():
    assert Dish("Suppe", prices=("1,00",)).prices == ("1,00", "", "")
    assert Dish("Suppe", prices=("1", "2", "3", "4")).prices == ("1", "2", "3")


def test_favorite_is_case_insensitive_substring():
    dish = Dish("Wiener SCHNITZEL mit Pommes")
    assert dish.is_favorite(["schnitzel"])
    assert dish.is_favorite(["Schnitzel"])
    assert not dish.is_favorite(["currywurst"])
    assert not dish.is_favorite([])


def test_fetch_parses_response():
    def handler(request):
        return httpx.Response(200, text=PLAN_HTML, headers={"content-type": "text/html; charset=utf-8"})

    dishes = asyncio.run(fetch_canteen_plan("http://mensa.test/today", transport=httpx.MockTransport(handler)))
    assert len(dishes) == 3


def test_fetch_http_error_raises_menu_fetch_error():
    def handler(request):
        return httpx.Response(503, text="down")

    with pytest.raises(MenuFetchError) as exc_info:
        asyncio.run(fetch_canteen_plan("http://mensa.test/today", transport=httpx.MockTransport(handler)))
    assert exc_info.value.url == "http://mensa.test/today"


def test_fetch_network_error_raises_menu_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MenuFetchError):
        asyncio.run(fetch_canteen_plan("http://mensa.test/today", transport=httpx.MockTransport(handler)))


def test_inline_markup_does_not_glue_words():
    document = (
        '<table><tr><td class="dish-description">'
        'Nudeln<br>mit <span>Soße</span>(<span>3</span>,<span>9</span>)'
        '</td></tr></table>'
    )
    (dish,) = parse_canteen_plan(document)
    assert dish.name == "Nudeln mit Soße (3, 9)"


def test_dish_prices_annotated_as_three_tiers():
    assert Dish.__annotations__["prices"] == tuple[str, str, str]
