# Default settings for MensaBot.
# Secrets (BOT_TOKEN, DEBUG_CHAT_ID) and per-deployment overrides go into config_secret.py

VERSION = "v0.5"
DISPLAY_NAME_DEFAULT = "MensaBot"

# Canteen plan pages
CANTEEN_URL_TODAY = "http://speiseplan.studierendenwerk-hamburg.de/de/580/2018/0/"
CANTEEN_URL_TOMORROW = "http://speiseplan.studierendenwerk-hamburg.de/de/580/2018/99/"
FETCH_TIMEOUT = 15  # seconds

# More mentions than this is probably a broadcast (@all style), ignore those
MAX_MENTIONS = 3

# Lower-cased substrings of dish names to mark with a heart
FAVORITES_DEFAULT = ["schnitzel", "currywurst"]

LOG_DIR = "logs"
