import pytest

from commands import CommandClassifier, IntentKind, keyword_pattern


@pytest.fixture
def classifier():
    return CommandClassifier("MensaBot")


@pytest.mark.parametrize("text, kind", [
    ("are you alive?", IntentKind.STATUS),
    ("Still RUNNING", IntentKind.STATUS),
    ("heute?", IntentKind.MENU_TODAY),
    ("What's for lunch today", IntentKind.MENU_TODAY),
    ("Hunger!", IntentKind.MENU_TODAY),
    ("und morgen?", IntentKind.MENU_TOMORROW),
    ("Tomorrow", IntentKind.MENU_TOMORROW),
    ("Legende bitte", IntentKind.LEGEND),
    ("was heißt nummer 14", IntentKind.LEGEND),
    ("Zusatzstoffe?", IntentKind.LEGEND),
    ("help", IntentKind.HELP),
    ("list commands", IntentKind.HELP),
    ("thanks!", IntentKind.THANKS),
    ("Danke dir", IntentKind.THANKS),
    ("hello there", IntentKind.UNRECOGNIZED),
    ("", IntentKind.UNRECOGNIZED),
])
def test_keywords(classifier, text, kind):
    assert classifier.classify(text).kind is kind


@pytest.mark.parametrize("text", ["setup", "helpful", "thankful", "legendary", "heutewieder"])
def test_keywords_must_be_whole_words(classifier, text):
    assert classifier.classify(text).kind is IntentKind.UNRECOGNIZED


def test_menu_today_wins_over_help(classifier):
    assert classifier.classify("help today").kind is IntentKind.MENU_TODAY


def test_status_wins_over_everything(classifier):
    assert classifier.classify("up? heute? help? thanks").kind is IntentKind.STATUS


def test_rule_order_is_the_precedence(classifier):
    assert [kind for kind, _ in classifier.rules] == [
        IntentKind.STATUS,
        IntentKind.MENU_TODAY,
        IntentKind.MENU_TOMORROW,
        IntentKind.ORDER,
        IntentKind.LEGEND,
        IntentKind.HELP,
        IntentKind.THANKS,
    ]


@pytest.mark.parametrize("text, sub, content", [
    ("@MensaBot order open Pizza from Luigi", "open", "Pizza from Luigi"),
    ("@mensabot order submit Margherita", "submit", "Margherita"),
    ("@MensaBot order list", "list", ""),
    ("@MensaBot order close ", "close", ""),
])
def test_order_commands(classifier, text, sub, content):
    intent = classifier.classify(text)
    assert intent.kind is IntentKind.ORDER
    assert intent.subcommand == sub
    assert intent.content == content


@pytest.mark.parametrize("text", [
    "@OtherBot order open Pizza",
    "order open Pizza",
    "@MensaBot order cancel",
    "@MensaBot Order open Pizza",
    "please @MensaBot order list",
])
def test_malformed_order_falls_through(classifier, text):
    assert classifier.classify(text).kind is not IntentKind.ORDER


def test_malformed_order_with_keyword_uses_keyword(classifier):
    assert classifier.classify("@MensaBot order help").kind is IntentKind.HELP


def test_order_content_with_menu_keyword_is_menu(classifier):
    assert classifier.classify("@MensaBot order open Pizza today").kind is IntentKind.MENU_TODAY


def test_keyword_pattern_escapes_words():
    pattern = keyword_pattern("a.b")
    assert pattern.search("say a.b now")
    assert not pattern.search("say axb now")
