# normalizer.py
import re
from datetime import date
from typing import Any, Dict, List, Optional, Union

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat, PhoneNumberType

from models import Address, CrosswalkEntry, JurisdictionMatch, PhoneCheck, PhoneNumber
from reference_data import (
    ADDRESS_COUNTRIES,
    DEFAULT_PHONE_CODE,
    DEFAULT_THREE_LETTER,
    DEFAULT_TWO_LETTER,
    JURISDICTION_ALIASES,
    JURISDICTIONS,
    PHONE_COUNTRY_CODES,
    PROVIDER_CODE_OVERRIDES,
    STATE_ADDRESS_COUNTRIES,
    TWO_TO_THREE,
    country_name,
)


class MalformedAddress(ValueError):
    pass


class UnparseablePhone(ValueError):
    pass


# -----------------------------------------------------------------------------
# Jurisdiction crosswalk
# -----------------------------------------------------------------------------
def _build_crosswalk() -> Dict[str, CrosswalkEntry]:
    table: Dict[str, CrosswalkEntry] = {}
    for two, three in TWO_TO_THREE.items():
        entry = CrosswalkEntry(
            two_letter=two,
            three_letter=three,
            provider_code=PROVIDER_CODE_OVERRIDES.get(two, two),
        )
        table[two] = entry
        table.setdefault(three, entry)
    # sub-national registries (US-NY, AE-DU ...) keep their own provider code
    for code, _name in JURISDICTIONS:
        if "-" in code:
            parent = code.split("-", 1)[0]
            table[code] = CrosswalkEntry(
                two_letter=code,
                three_letter=TWO_TO_THREE[parent],
                provider_code=code,
            )
    return table


CROSSWALK: Dict[str, CrosswalkEntry] = _build_crosswalk()


def _build_name_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for code, name in JURISDICTIONS:
        index.setdefault(name.upper(), code)
    for code, name in ADDRESS_COUNTRIES:
        index.setdefault(name.upper(), code)
    for code, _phone, name in PHONE_COUNTRY_CODES:
        index.setdefault(name.upper(), code)
    return index


_NAME_INDEX = _build_name_index()


def _lookup_crosswalk(code: Optional[str]) -> Optional[CrosswalkEntry]:
    key = re.sub(r"\s+", " ", (code or "").strip().upper())
    if not key:
        return None
    key = JURISDICTION_ALIASES.get(key, key)
    entry = CROSSWALK.get(key)
    if entry is None and key in _NAME_INDEX:
        entry = CROSSWALK.get(_NAME_INDEX[key])
    return entry


def resolve_jurisdiction(code: Optional[str]) -> JurisdictionMatch:
    """
    Resolve a two-letter, three-letter, sub-national or named jurisdiction.
    Unknown input falls back to the United Kingdom with degraded=True.
    """
    entry = _lookup_crosswalk(code)
    degraded = entry is None
    if entry is None:
        entry = CROSSWALK[DEFAULT_TWO_LETTER]
    return JurisdictionMatch(
        two_letter=entry.two_letter,
        three_letter=entry.three_letter,
        provider_code=entry.provider_code,
        degraded=degraded,
    )


def is_known_jurisdiction(code: Optional[str]) -> bool:
    return _lookup_crosswalk(code) is not None


def country_code_to_three_letter(code: Optional[str]) -> str:
    return resolve_jurisdiction(code).three_letter


def country_code_to_provider_code(code: Optional[str]) -> str:
    return resolve_jurisdiction(code).provider_code


# -----------------------------------------------------------------------------
# Phone numbers
# -----------------------------------------------------------------------------
_PHONE_CODE_BY_TWO: Dict[str, str] = {}
for _two, _phone, _name in PHONE_COUNTRY_CODES:
    _PHONE_CODE_BY_TWO.setdefault(_two, _phone)

_CALLING_CODES: List[str] = sorted({p for _, p, _ in PHONE_COUNTRY_CODES}, key=len, reverse=True)

_PHONE_SEPARATORS = re.compile(r"[\s\-\.\(\)/]")
_DIGITS_RE = re.compile(r"[0-9]+")


def calling_code_for(jurisdiction: Optional[str]) -> str:
    match = resolve_jurisdiction(jurisdiction)
    two = match.two_letter.split("-", 1)[0]
    return _PHONE_CODE_BY_TWO.get(two, DEFAULT_PHONE_CODE)


def parse_phone(raw: Optional[str], default_jurisdiction: str = DEFAULT_THREE_LETTER) -> PhoneNumber:
    """
    Split a free-text phone number into calling code and national number.

      "+44 7700 900123"  -> +44 / 7700900123
      "0044 7700900123"  -> +44 / 7700900123
      "07700 900123"     -> default code / 7700900123 (trunk 0 dropped)
    """
    text = (raw or "").strip()
    if not text:
        raise UnparseablePhone("phone number is empty")

    compact = _PHONE_SEPARATORS.sub("", text.replace("(0)", ""))
    if compact.startswith("00"):
        compact = "+" + compact[2:]

    if compact.startswith("+"):
        digits = compact[1:]
        if not _DIGITS_RE.fullmatch(digits):
            raise UnparseablePhone("unexpected characters in phone number")
        for code in _CALLING_CODES:
            if digits.startswith(code[1:]):
                national = digits[len(code) - 1:]
                if len(national) < 4:
                    raise UnparseablePhone("national number is too short")
                return PhoneNumber(country_code=code, national_number=national)
        raise UnparseablePhone("unknown calling code")

    if not _DIGITS_RE.fullmatch(compact):
        raise UnparseablePhone("unexpected characters in phone number")
    if compact.startswith("0"):
        compact = compact[1:]
    if len(compact) < 4:
        raise UnparseablePhone("national number is too short")
    return PhoneNumber(country_code=calling_code_for(default_jurisdiction), national_number=compact)


def compose_phone(country_code: Optional[str], mobile: Optional[str]) -> PhoneNumber:
    """Combine a separately captured calling code and mobile into one number."""
    mobile = (mobile or "").strip()
    if mobile.startswith("+") or mobile.startswith("00"):
        return parse_phone(mobile)
    code = (country_code or "").strip() or DEFAULT_PHONE_CODE
    if not code.startswith("+"):
        code = "+" + code
    if not _DIGITS_RE.fullmatch(code[1:]):
        raise UnparseablePhone("calling code must be digits")
    return parse_phone(code + _PHONE_SEPARATORS.sub("", mobile).lstrip("0"))


def classify_mobile(country_code: str, national_number: str) -> PhoneCheck:
    try:
        parsed = phonenumbers.parse(f"{country_code}{national_number}", None)
    except NumberParseException:
        return PhoneCheck(valid=False, reason="unparseable")
    if not phonenumbers.is_valid_number(parsed):
        return PhoneCheck(valid=False, reason="invalid")
    kind = phonenumbers.number_type(parsed)
    is_mobile = kind in (PhoneNumberType.MOBILE, PhoneNumberType.FIXED_LINE_OR_MOBILE)
    return PhoneCheck(
        valid=True,
        is_mobile=is_mobile,
        e164=phonenumbers.format_number(parsed, PhoneNumberFormat.E164),
        reason=None if is_mobile else "not-mobile",
    )


# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------
_MONTHS = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6, "jul": 7, "july": 7,
    "aug": 8, "august": 8, "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10, "nov": 11, "november": 11, "dec": 12, "december": 12,
}


def _month_number(name: str) -> Optional[int]:
    return _MONTHS.get(name) or _MONTHS.get(name[:3])


def parse_date_string(text: Optional[str]) -> Optional[str]:
    """Parse the common ways people write a birth date into DDMMYYYY."""
    if not text:
        return None
    s = text.strip().lower()
    day = month = year = None

    digits = re.sub(r"[^0-9]", "", s)
    if len(digits) == 8:
        day, month, year = int(digits[:2]), int(digits[2:4]), digits[4:]

    if day is None:
        m = re.search(r"([0-9]{1,2})[\s\-/.]+([0-9]{1,2})[\s\-/.]+([0-9]{2,4})", s)
        if m:
            day, month, year = int(m.group(1)), int(m.group(2)), m.group(3)

    if day is None:
        m = re.search(r"([0-9]{1,2})(?:st|nd|rd|th)?\s+([a-z]+)\s+([0-9]{2,4})", s)
        if m:
            day, month, year = int(m.group(1)), _month_number(m.group(2)), m.group(3)

    if day is None:
        m = re.search(r"([a-z]+)\s+([0-9]{1,2})(?:st|nd|rd|th)?,?\s+([0-9]{2,4})", s)
        if m:
            day, month, year = int(m.group(2)), _month_number(m.group(1)), m.group(3)

    if day is None or not month or not year or len(year) not in (2, 4):
        return None
    if len(year) == 2:
        year = ("20" if int(year) <= 30 else "19") + year

    if not 1 <= day <= 31 or not 1 <= month <= 12 or not 1900 <= int(year) <= 2100:
        return None
    return f"{day:02d}{month:02d}{year}"


def is_valid_dob_digits(digits: Optional[str]) -> bool:
    if not digits or not re.fullmatch(r"[0-9]{8}", digits):
        return False
    day, month, year = int(digits[:2]), int(digits[2:4]), int(digits[4:])
    if not 1900 <= year <= 2100:
        return False
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def dob_to_iso(digits: str) -> str:
    return f"{digits[4:]}-{digits[2:4]}-{digits[:2]}T00:00:00.000Z"


# -----------------------------------------------------------------------------
# Addresses
# -----------------------------------------------------------------------------
_FLAT_RE = re.compile(r"^(?:flat|apartment|unit|apt)\s+([0-9]+[a-z]?)", re.I)
_NUMBER_RE = re.compile(r"^([0-9]+[a-z]?)\b", re.I)
_NUMBERED_STREET_RE = re.compile(r"^([0-9]+[a-z]?)\s+(.+)$", re.I)
_UK_POSTCODE_RE = re.compile(r"^([A-Z]{1,2}[0-9][A-Z0-9]?)\s*([0-9][A-Z]{2})$", re.I)


def _first(raw: Dict[str, Any], *keys: str) -> str:
    for k in keys:
        v = raw.get(k)
        if v is not None and str(v).strip():
            return str(v).strip()
    return ""


def _is_numeric(s: str) -> bool:
    return bool(re.fullmatch(r"[0-9]+", (s or "").strip()))


def format_uk_postcode(postcode: str) -> str:
    m = _UK_POSTCODE_RE.match((postcode or "").strip())
    if not m:
        return (postcode or "").strip()
    return f"{m.group(1).upper()} {m.group(2).upper()}"


def _split_premise(prefix: str, flat: str, number: str):
    """Strip flat token, then building number; the rest is a building name."""
    name = ""
    prefix = prefix.strip()
    m = _FLAT_RE.match(prefix)
    if m and not flat:
        flat = m.group(1)
        prefix = re.sub(r"^[,\s]+", "", prefix[m.end():]).strip()
    if not number:
        m = _NUMBER_RE.match(prefix)
        if m:
            number = m.group(1)
            prefix = re.sub(r"^[,\s]+", "", prefix[m.end():]).strip()
    if prefix and not _is_numeric(prefix):
        name = prefix
    return flat, number, name


def _uk_from_mapping(raw: Dict[str, Any]) -> Address:
    thoroughfare = _first(raw, "thoroughfare")
    line_1 = _first(raw, "line_1", "line1", "address_1")
    line_2 = _first(raw, "line_2", "line2", "address_2")
    provider_name = _first(raw, "building_name")
    number = _first(raw, "building_number", "sub_building_number")
    flat = _first(raw, "flat_number")
    name_from_line_1 = ""

    if line_1 and (not number or not provider_name):
        prefix = line_1
        if thoroughfare and thoroughfare in prefix:
            prefix = re.sub(r",\s*$", "", prefix.replace(thoroughfare, "", 1)).strip()
        if prefix:
            flat, number, name_from_line_1 = _split_premise(prefix, flat, number)

    name_parts = [
        _first(raw, "sub_building_name"),
        provider_name if provider_name and not _is_numeric(provider_name) else name_from_line_1,
        line_2 if line_2 and line_2 != thoroughfare else "",
    ]
    return Address(
        country="GBR",
        flat_number=flat,
        building_number=number,
        building_name=", ".join(p for p in name_parts if p),
        street=thoroughfare or _first(raw, "line_3", "street"),
        sub_street=_first(raw, "sub_street", "dependent_locality"),
        town=_first(raw, "town_or_city", "town", "post_town"),
        postcode=format_uk_postcode(_first(raw, "postcode")),
    )


def _lined_from_mapping(raw: Dict[str, Any], country: str) -> Address:
    state = _first(raw, "state", "province") if country in STATE_ADDRESS_COUNTRIES else ""
    return Address(
        country=country,
        line1=_first(raw, "line_1", "line1", "address_1"),
        line2=_first(raw, "line_2", "line2", "address_2", "line_3", "line_4"),
        street=_first(raw, "thoroughfare", "street"),
        sub_street=_first(raw, "sub_street"),
        town=_first(raw, "town_or_city", "town", "city"),
        postcode=_first(raw, "postcode", "zip", "zip_code"),
        state=state,
    )


def _country_from_text(part: str) -> Optional[str]:
    key = part.strip().upper()
    if key in JURISDICTION_ALIASES or key in _NAME_INDEX or (len(key) == 3 and key in CROSSWALK):
        return country_code_to_three_letter(key)
    return None


def _uk_from_parts(parts: List[str]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    names: List[str] = []
    after_street: List[str] = []
    for part in parts:
        if "street" in fields:
            after_street.append(part)
            continue
        rest = part
        m = _FLAT_RE.match(rest)
        if m and "flat_number" not in fields:
            fields["flat_number"] = m.group(1)
            rest = re.sub(r"^[,\s]+", "", rest[m.end():]).strip()
            if not rest:
                continue
        if "building_number" in fields:
            fields["street"] = rest
            continue
        m = _NUMBERED_STREET_RE.match(rest)
        if m:
            fields["building_number"] = m.group(1)
            fields["street"] = m.group(2).strip()
        elif re.fullmatch(r"[0-9]+[a-z]?", rest, re.I):
            fields["building_number"] = rest
        else:
            names.append(rest)
    # no building number: name, street and optionally a sub-street
    if len(names) > 1 and "street" not in fields and "building_number" not in fields:
        if len(names) > 2:
            after_street.append(names.pop())
        fields["street"] = names.pop()
    if names:
        fields["building_name"] = ", ".join(names)
    if after_street:
        fields["sub_street"] = ", ".join(after_street)
    return fields


def _from_text(text: str, country_hint: Optional[str]) -> Address:
    parts = [p.strip() for p in text.split(",") if p.strip()]
    if not parts:
        raise MalformedAddress("address text is empty")

    country = None
    if len(parts) > 1:
        country = _country_from_text(parts[-1])
        if country:
            parts.pop()
    country = country or country_code_to_three_letter(country_hint or DEFAULT_THREE_LETTER)

    postcode = ""
    if parts and country == "GBR" and _UK_POSTCODE_RE.match(parts[-1]):
        postcode = format_uk_postcode(parts.pop())
    elif parts and country != "GBR" and len(parts) > 1 and re.search(r"[0-9]", parts[-1]) and len(parts[-1]) <= 10:
        postcode = parts.pop()

    state = ""
    if country in STATE_ADDRESS_COUNTRIES and len(parts) > 1 and re.fullmatch(r"[A-Za-z .]{2,}", parts[-1]):
        state = parts.pop()

    if not parts:
        raise MalformedAddress("address has no town")
    town = parts.pop()

    if country == "GBR":
        return Address(country=country, town=town, postcode=postcode, **_uk_from_parts(parts))
    return Address(
        country=country,
        town=town,
        postcode=postcode,
        state=state,
        line1=parts[0] if parts else None,
        line2=", ".join(parts[1:]) if len(parts) > 1 else None,
    )


def to_canonical_address(raw: Union[Address, Dict[str, Any], str, None],
                         country_hint: Optional[str] = None) -> Address:
    """
    Convert a provider address record, a canonical mapping or a free-text
    comma separated address into the canonical Address.
    Raises MalformedAddress when nothing usable is present.
    """
    if isinstance(raw, Address):
        return raw
    if raw is None:
        raise MalformedAddress("address is missing")
    if isinstance(raw, str):
        if not raw.strip():
            raise MalformedAddress("address text is empty")
        return _from_text(raw, country_hint)
    if not isinstance(raw, dict):
        raise MalformedAddress(f"unsupported address type {type(raw).__name__}")
    if not any(v is not None and str(v).strip() for v in raw.values()):
        raise MalformedAddress("address has no usable fields")

    country = country_code_to_three_letter(_first(raw, "country") or country_hint or DEFAULT_THREE_LETTER)
    if country == "GBR":
        return _uk_from_mapping(raw)
    return _lined_from_mapping(raw, country)


def address_problems(address: Optional[Address]) -> List[str]:
    if address is None:
        return ["address is missing"]
    problems = []
    if address.country == "GBR":
        if address.line1 or address.line2:
            problems.append("line1/line2 are not used for UK addresses")
        if not (address.flat_number or address.building_number or address.building_name):
            problems.append("flat number, building number or building name is required")
        if not address.town:
            problems.append("town is required")
        if not address.postcode:
            problems.append("postcode is required")
    elif address.country in STATE_ADDRESS_COUNTRIES:
        if not address.line1:
            problems.append("address line 1 is required")
        if not address.town:
            problems.append("town is required")
        if not address.postcode:
            problems.append("postcode is required")
        if not address.state or len(address.state) < 2:
            problems.append("state is required")
    else:
        if len(address.country or "") != 3:
            problems.append("country must be a three-letter code")
        if not address.line1:
            problems.append("address line 1 is required")
        if not address.town:
            problems.append("town is required")
    return problems


def format_address_for_display(address: Optional[Address]) -> str:
    if address is None:
        return ""
    number_street = " ".join(p for p in (address.building_number, address.street) if p)
    parts = [
        f"Flat {address.flat_number}" if address.flat_number else None,
        address.building_name,
        number_street,
        address.sub_street,
        address.line1,
        address.line2,
        address.town,
        address.state,
        address.postcode,
        country_name(address.country) or address.country,
    ]
    return ", ".join(p for p in parts if p)


def address_payload(address: Address) -> Dict[str, str]:
    """Provider wire shape: individual fields for the UK, lines elsewhere."""
    if address.country == "GBR":
        return {
            "building_name": address.building_name or "",
            "building_number": address.building_number or "",
            "flat_number": address.flat_number or "",
            "postcode": address.postcode or "",
            "street": address.street or "",
            "sub_street": address.sub_street or "",
            "town": address.town or "",
            "country": address.country,
        }
    return {
        "address_1": address.line1 or "",
        "address_2": address.line2 or "",
        "postcode": address.postcode or "",
        "street": address.street or "",
        "sub_street": address.sub_street or "",
        "town": address.town or "",
        "state": (address.state or "") if address.country in STATE_ADDRESS_COUNTRIES else "",
        "country": address.country,
    }


# -----------------------------------------------------------------------------
# Document storage keys
# -----------------------------------------------------------------------------
def extract_storage_key(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    m = re.search(r"cloudfront\.net/(.+)$", url)
    if m:
        return m.group(1)
    m = re.search(r"\.amazonaws\.com/(.+)$", url)
    if m:
        return m.group(1)
    if not url.startswith("http"):
        return url
    return None
