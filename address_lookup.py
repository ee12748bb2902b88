# address_lookup.py
import os
from typing import Dict, List

import requests
from dotenv import load_dotenv

from models import Address
from normalizer import to_canonical_address
from registry_client import REQ_TIMEOUT, build_session

load_dotenv()

GETADDRESS_API_KEY = os.getenv("GETADDRESS_API_KEY")
BASE_URL_GETADDRESS = "https://api.getAddress.io"

SESSION = build_session()

if not GETADDRESS_API_KEY:
    print("⚠️  WARNING: GETADDRESS_API_KEY is not set. Address lookup will fail.", flush=True)


class AddressLookupUnavailable(Exception):
    pass


def _get(path: str, params: Dict[str, str] = None) -> dict:
    query = {"api-key": GETADDRESS_API_KEY or ""}
    query.update(params or {})
    try:
        r = SESSION.get(f"{BASE_URL_GETADDRESS}/{path.lstrip('/')}", params=query, timeout=REQ_TIMEOUT)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        # never echo the url: the key travels in the query string
        print(f"[ADDRESS] Lookup failed: {type(e).__name__}", flush=True)
        raise AddressLookupUnavailable("address lookup failed") from e


def search_addresses(term: str) -> List[Dict[str, str]]:
    """Autocomplete suggestions: [{id, address}]. Terms under 3 characters return nothing."""
    term = (term or "").strip()
    if len(term) < 3:
        return []
    data = _get(f"autocomplete/{requests.utils.quote(term)}", {"all": "true"})
    suggestions = [
        {"id": s.get("id"), "address": s.get("address")}
        for s in data.get("suggestions", []) if s.get("id")
    ]
    print(f"[ADDRESS] {len(suggestions)} suggestion(s)", flush=True)
    return suggestions


def get_address(address_id: str) -> Address:
    if not address_id or not address_id.strip():
        raise ValueError("address_id is required")
    raw = _get(f"get/{requests.utils.quote(address_id.strip())}")
    # getAddress only covers the UK; its `country` is a constituent nation
    return to_canonical_address(raw, "GBR")
