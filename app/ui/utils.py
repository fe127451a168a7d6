from lib.config import get_settings
from lib.formatting import format_currency


def format_money(val):
    settings = get_settings()
    return format_currency(val, settings.currency_symbol, settings.display_decimals)


def format_percent(rate):
    return f"{float(rate) * 100:,.2f}%"


RESULT_STATE_KEY = "tax_result"


def store_result(state, category, locale, result):
    """Remember the last form result together with the inputs it depends on."""
    state[RESULT_STATE_KEY] = None if result is None else (category, locale, result)


def stored_result(state, category, locale):
    """Last form result, or None once the category or message locale changed."""
    entry = state.get(RESULT_STATE_KEY)
    if entry is None or entry[:2] != (category, locale):
        return None
    return entry[2]
