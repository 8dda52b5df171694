import gconf


def format_money(value: float) -> str:
    """Format an amount the way the storefront shows it to customers, e.g. 1.000.000đ"""
    locale = gconf.get("promotions.locale")
    integer_part, _, fraction_part = f"{value:,.3f}".partition(".")
    text = integer_part.replace(",", locale["thousands_separator"])
    if fraction_part := fraction_part.rstrip("0"):
        text += locale["decimal_separator"] + fraction_part
    return text + locale["currency_suffix"]
