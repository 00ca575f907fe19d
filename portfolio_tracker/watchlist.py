from dataclasses import replace
from datetime import date
from typing import Mapping, Optional, Sequence

from .config import TrackerConfig
from .models import ZERO, Quote, WatchlistItem
from .returns import annualized_gain, days_between


def enrich(
    items: Sequence[WatchlistItem],
    current_prices: Mapping[str, Quote],
    as_of: Optional[date] = None,
    config: Optional[TrackerConfig] = None,
) -> list[WatchlistItem]:
    """Measure each watchlist item as if one unit was bought when it was added.

    Items keep their order. Items with no quote come back as given, so their
    derived fields stay at whatever the caller passed in.
    """
    as_of = as_of or date.today()
    return [_enrich_item(item, current_prices.get(item.symbol), as_of, config) for item in items]


def _enrich_item(
    item: WatchlistItem,
    quote: Optional[Quote],
    as_of: date,
    config: Optional[TrackerConfig],
) -> WatchlistItem:
    if quote is None:
        return item

    gain = quote.price - item.price_when_added
    day_gain = quote.price - quote.previous_close

    return replace(
        item,
        current_price=quote.price,
        gain_since_added=gain,
        gain_since_added_percent=(
            gain / item.price_when_added * 100 if item.price_when_added != 0 else ZERO
        ),
        day_gain=day_gain,
        day_gain_percent=(
            day_gain / quote.previous_close * 100 if quote.previous_close > 0 else ZERO
        ),
        annualized_gain_percent=annualized_gain(
            item.price_when_added,
            quote.price,
            days_between(item.date_added, as_of),
            config,
        ),
    )
