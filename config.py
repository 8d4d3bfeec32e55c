"""Server-wide configuration constants for the Yokai Hunters Society sheet server."""

import os

ATTRIBUTE_NAMES = ("courage", "self_control", "wisdom", "sharpness")
ENCUMBERED_ATTRIBUTES = ("courage", "self_control")  # Slowed down by a heavy pack
ATTRIBUTE_MAX = 5
ATTRIBUTE_TIERS = (5, 4, 3, 2)   # Scarce attribute ceilings, best first
HEALTH_MAX = 15
ENCUMBRANCE_FREE_ITEMS = 8       # Equipment carried without penalty

BASE_DIE_SIDES = 6
CURSE_DIE_SIDES = 8
CURSE_RESISTANCE_SLOTS = ("1", "2", "3", "4")

SUCCESS_ABOVE = 9                # Totals above this succeed
BAD_OMEN_TOTAL = 9               # Exactly this is a bad omen

TABLE_NAME = os.environ.get("TABLE_NAME", "Yokai Hunters Society")
LOCALE = os.environ.get("YHS_LOCALE", "en")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
CHAT_LOG_LIMIT = int(os.environ.get("CHAT_LOG_LIMIT", "200"))
