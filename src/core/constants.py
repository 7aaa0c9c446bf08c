"""Constants for historic worth calculations."""

# Asset
ALPH_SYMBOL = "ALPH"
ALPH_DECIMALS = 18  # 1 ALPH = 10**18 smallest units

# Price history
DEFAULT_CURRENCY = "USD"
PRICE_HISTORY_DAYS = 365  # Trailing daily window of the price feed

# Chart
MIN_DISPLAY_POINTS = 2  # Fewer points than this renders nothing
UPWARD_COLOR = "#3ED282"
DOWNWARD_COLOR = "#ED4A34"
DATE_FORMAT = "%Y-%m-%d"
