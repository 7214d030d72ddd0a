"""Token amount formatting."""

from decimal import ROUND_DOWN, Decimal, localcontext

WTON_DECIMALS = 27
REWARD_DECIMALS = 18
DISPLAY_PRECISION = 8


def format_token_amount(
    amount: int | None,
    symbol: str = "WTON",
    decimals: int = REWARD_DECIMALS,
    precision: int = DISPLAY_PRECISION,
) -> str:
    """
    Scale a raw integer amount by 10**decimals and render it with at most
    `precision` decimal places (truncated, trailing zeros dropped).

    None is rendered as zero: an unresolved amount displays as "0 WTON".
    """
    with localcontext() as ctx:
        ctx.prec = 80
        value = Decimal(amount or 0) / Decimal(10**decimals)
        value = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_DOWN)
        if value == 0:
            # quantize keeps the exponent, so 0E-8 would render as 0.00000000
            return f"0 {symbol}"
        return f"{format(value.normalize(), 'f')} {symbol}"
