"""French display formatting for check details."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

# fr-FR groups thousands with a narrow no-break space
THOUSANDS_SEPARATOR = "\u202f"


def format_amount(value: Decimal) -> str:
    """Format an amount the way fr-FR renders numbers, e.g. 12 500 or 1 234,5.

    Thousands are grouped with a narrow no-break space.
    """
    with localcontext() as ctx:
        # Room for every integral digit, the two decimals and a rounding carry
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        integral, _, fraction = f"{rounded:,.2f}".partition(".")
    integral = integral.replace(",", THOUSANDS_SEPARATOR)
    fraction = fraction.rstrip("0")
    return f"{integral},{fraction}" if fraction else integral


def format_week(week: date) -> str:
    return week.strftime("%d/%m/%Y")
