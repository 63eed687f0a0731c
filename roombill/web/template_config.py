"""Jinja2 template configuration."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from fastapi.templating import Jinja2Templates

from roombill.web.dependencies import get_flash_messages

# Template directory is at roombill/templates/
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def format_currency(amount: Decimal | float | int) -> str:
    """Format an amount as Vietnamese dong, e.g. 843.636 ₫."""
    rounded = int(Decimal(str(amount)).quantize(Decimal("1")))
    return f"{rounded:,}".replace(",", ".") + " ₫"


def format_kwh(value: Decimal | float | int) -> str:
    """Format a consumption with one decimal, e.g. 190.0 kWh."""
    return f"{float(value):.1f} kWh"


def format_datetime(value: datetime | None) -> str:
    """Format a timestamp as dd/mm/yyyy hh:mm."""
    if value is None:
        return "N/A"
    return value.strftime("%d/%m/%Y %H:%M")


templates.env.filters["currency"] = format_currency
templates.env.filters["kwh"] = format_kwh
templates.env.filters["datetime"] = format_datetime
templates.env.globals["get_flash_messages"] = get_flash_messages
