"""
CoinGecko-specific parsers for converting raw market payloads to plain values.

Every numeric field goes through ``to_optional_float``: absent, non-numeric,
NaN and infinite values all become ``None`` (unknown), never 0.
"""

import json
import math
from typing import Any, Optional, Union

try:
    import orjson
    HAS_ORJSON = True
except ImportError:
    HAS_ORJSON = False

from ..errors import MalformedDataError


def to_optional_float(value: Any) -> Optional[float]:
    """
    Coerce a provider value to a finite float.

    Args:
        value: Raw value from the payload (number, numeric string, None, ...)

    Returns:
        Finite float, or None if the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None

    return number


def parse_price_series(raw_series: Any) -> tuple[float, ...]:
    """
    Parse a chronological price series, dropping non-numeric samples.

    Args:
        raw_series: List of raw price samples

    Returns:
        Tuple of finite prices in their original order
    """
    if not isinstance(raw_series, (list, tuple)):
        return ()

    parsed = (to_optional_float(sample) for sample in raw_series)
    return tuple(price for price in parsed if price is not None)


def _first_known(entry: dict[str, Any], *keys: str) -> Optional[float]:
    """Return the first key whose value parses to a number."""
    for key in keys:
        value = to_optional_float(entry.get(key))
        if value is not None:
            return value
    return None


def parse_market_entry(entry: dict[str, Any]) -> dict[str, Any]:
    """
    Parse one element of a ``/coins/markets`` response.

    Args:
        entry: Raw market entry

    Returns:
        Dict with id, price, change_24h, change_7d and price_series

    Raises:
        MalformedDataError: If the entry is not a mapping or has no id
    """
    if not isinstance(entry, dict):
        raise MalformedDataError(
            f"Market entry must be a mapping, got {type(entry).__name__}",
            raw_data=str(entry)[:100],
            expected_format="object"
        )

    coin_id = entry.get("id")
    if not isinstance(coin_id, str) or not coin_id:
        raise MalformedDataError(
            "Market entry missing id",
            raw_data=str(entry)[:100],
            expected_format="object with string id"
        )

    sparkline = entry.get("sparkline_in_7d")
    raw_series = sparkline.get("price") if isinstance(sparkline, dict) else None

    return {
        "id": coin_id,
        "price": to_optional_float(entry.get("current_price")),
        "change_24h": _first_known(
            entry,
            "price_change_percentage_24h_in_currency",
            "price_change_percentage_24h",
        ),
        "change_7d": _first_known(
            entry,
            "price_change_percentage_7d_in_currency",
            "price_change_percentage_7d",
        ),
        "price_series": parse_price_series(raw_series),
    }


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Decode a raw JSON response body (text or undecoded bytes).

    Uses orjson when available, falls back to standard json.

    Raises:
        MalformedDataError: If the body is not valid JSON or not valid UTF-8
    """
    try:
        if HAS_ORJSON:
            return orjson.loads(raw_data)
        return json.loads(raw_data)
    except (ValueError, TypeError) as e:
        # orjson.JSONDecodeError subclasses ValueError
        raise MalformedDataError(
            f"JSON parse error: {e}",
            raw_data=str(raw_data)[:100],
            expected_format="json"
        )
