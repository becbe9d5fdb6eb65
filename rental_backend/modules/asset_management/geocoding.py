"""Reverse geocoding of map coordinates into Thai address fields.

Nominatim returns both a structured ``address`` object and a comma
separated ``display_name``. For Thai addresses the display name is the
more reliable source for the sub-district (แขวง/ตำบล), so it is consulted
first and the structured fields are used as fallbacks.
"""

import re

import httpx
from pydantic import BaseModel

from ...config import settings
from ...core.exceptions import ExternalServiceError, NotFoundError
from ...core.logging import get_logger

logger = get_logger("assets.geocoding")

KHET = "เขต"
KHWAENG = "แขวง"
AMPHOE = "อำเภอ"
TAMBON = "ตำบล"
CHANGWAT = "จังหวัด"
BANGKOK = "กรุงเทพมหานคร"
THAILAND = "ประเทศไทย"


class GeocodedAddress(BaseModel):
    """Address fields matching the asset form."""

    address: str = ""
    district: str = ""
    amphoe: str = ""
    province: str = ""
    postal_code: str = ""
    latitude: float | None = None
    longitude: float | None = None
    display_name: str = ""


def _strip_prefix(part: str, word: str) -> str:
    """Drop everything up to and including ``word``: 'เขตประเวศ' -> 'ประเวศ'."""
    return re.sub(rf"^.*?{word}\s*", "", part, count=1).strip()


def _cut_from(text: str, word: str) -> str:
    """Drop ``word`` and everything after it."""
    return re.sub(rf"{word}.*$", "", text).strip()


def _parse_amphoe(addr: dict, parts: list[str]) -> str:
    amphoe = addr.get("city_district") or addr.get("county") or ""
    if amphoe:
        return amphoe
    for part in parts:
        if KHET in part and KHWAENG not in part and TAMBON not in part:
            return _strip_prefix(part, KHET)
        if AMPHOE in part:
            return _strip_prefix(part, AMPHOE)
    return ""


def _parse_district(addr: dict, parts: list[str]) -> str:
    for part in parts:
        if KHWAENG in part and KHET not in part and TAMBON not in part:
            district = _strip_prefix(part, KHWAENG)
        elif TAMBON in part and AMPHOE not in part and KHET not in part:
            district = _strip_prefix(part, TAMBON)
        else:
            continue
        if KHET in district:
            district = _cut_from(district, KHET)
        if AMPHOE in district:
            district = _cut_from(district, AMPHOE)
        return district

    for key in ("suburb", "village", "town"):
        value = addr.get(key)
        if value and AMPHOE not in value and KHET not in value:
            return value

    # Fall back to the part right before the first อำเภอ/เขต entry
    blocked = ("ถนน", "เลขที่", AMPHOE, KHET, CHANGWAT, KHWAENG, TAMBON)
    for index, part in enumerate(parts):
        if index > 0 and (AMPHOE in part or KHET in part):
            previous = parts[index - 1]
            if previous and not any(word in previous for word in blocked):
                return previous.strip()
    return ""


def _parse_province(addr: dict, parts: list[str]) -> str:
    province = addr.get("state") or addr.get("province") or ""
    if province:
        return province
    for part in parts:
        if "กรุงเทพ" in part or "มหานคร" in part:
            return BANGKOK
        if CHANGWAT in part:
            return _strip_prefix(part, CHANGWAT)
    if len(parts) > 1 and THAILAND in parts[-1]:
        second_last = parts[-2]
        if KHET not in second_last and KHWAENG not in second_last and TAMBON not in second_last:
            return second_last
    return ""


def parse_thai_address(data: dict) -> GeocodedAddress:
    """Turn a Nominatim reverse-geocoding response into address fields.

    Raises:
        NotFoundError: If the response has no ``address`` object
    """
    addr = data.get("address")
    if not addr:
        raise NotFoundError("No address found for this location")

    display_name = data.get("display_name") or ""
    parts = [p.strip() for p in display_name.split(",")] if display_name else []

    street_parts = [
        addr.get("house_number") or addr.get("house_name") or "",
        addr.get("road") or addr.get("street") or "",
    ]
    address = " ".join(p for p in street_parts if p) or (parts[0] if parts else "")

    return GeocodedAddress(
        address=address,
        district=_parse_district(addr, parts),
        amphoe=_parse_amphoe(addr, parts),
        province=_parse_province(addr, parts),
        postal_code=addr.get("postcode") or "",
        display_name=display_name,
    )


async def reverse_geocode(
    lat: float, lng: float, client: httpx.AsyncClient | None = None
) -> GeocodedAddress:
    """Look up the Thai address at the given coordinates via Nominatim."""
    params = {
        "format": "json",
        "lat": lat,
        "lon": lng,
        "addressdetails": 1,
        "accept-language": "th",
    }
    headers = {"User-Agent": settings.nominatim_user_agent}

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.nominatim_timeout_seconds)
    try:
        response = await client.get(settings.nominatim_url, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(
            "Reverse geocoding failed",
            extra={"lat": lat, "lng": lng, "error": str(e)},
            exc_info=True,
        )
        raise ExternalServiceError("nominatim", "reverse") from e
    finally:
        if owns_client:
            await client.aclose()

    result = parse_thai_address(data)
    result.latitude = lat
    result.longitude = lng
    return result
