# registry_client.py
import os, time, unicodedata, re
from datetime import datetime, timezone
from difflib import SequenceMatcher
from typing import Any, Dict, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dotenv import load_dotenv
load_dotenv()

from models import EntityKind, LinkedRecord, RegistryCandidate
from normalizer import resolve_jurisdiction

print(
    f"[BOOT] registry client | CH key? {bool(os.getenv('CH_API_KEY'))} "
    f"| CCEW key? {bool(os.getenv('CHARITY_API_KEY'))}",
    flush=True,
)

# -----------------------------------------------------------------------------
# Config
# -----------------------------------------------------------------------------
CH_API_KEY = os.getenv("CH_API_KEY")
CHARITY_API_KEY = os.getenv("CHARITY_API_KEY")

BASE_URL_CH = "https://api.company-information.service.gov.uk"
BASE_URL_CCEW = "https://api.charitycommission.gov.uk/register/api"

CACHE_TTL   = int(os.getenv("CACHE_TTL_SECONDS", "86400"))   # 24h default
REQ_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
BACKOFF     = float(os.getenv("BACKOFF_SECONDS", "1.5"))

SEARCH_LIMIT = 10

if not CH_API_KEY:
    print("⚠️  WARNING: CH_API_KEY is not set. Companies House lookups will fail.", flush=True)


class RegistryUnavailable(Exception):
    """The registry could not be reached or answered with an error."""


# -----------------------------------------------------------------------------
# HTTP session with retries
# -----------------------------------------------------------------------------
def build_session() -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=MAX_RETRIES, read=MAX_RETRIES, connect=MAX_RETRIES,
        backoff_factor=BACKOFF,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
    )
    s.mount("https://", HTTPAdapter(max_retries=retry))
    s.mount("http://", HTTPAdapter(max_retries=retry))
    return s

SESSION = build_session()
AUTH_CH = (CH_API_KEY, "")

# -----------------------------------------------------------------------------
# Tiny in-memory cache (GET only)
# -----------------------------------------------------------------------------
_CACHE: Dict[str, Tuple[float, Any]] = {}

def _cache_get(key: str):
    rec = _CACHE.get(key)
    if not rec:
        return None
    exp, data = rec
    if time.time() > exp:
        _CACHE.pop(key, None)
        return None
    return data

def _cache_set(key: str, data, ttl: int):
    _CACHE[key] = (time.time() + ttl, data)

def _hdrsig(headers: Optional[Dict[str, str]]) -> str:
    if not headers:
        return ""
    return "|".join(f"{k}:{v}" for k, v in sorted(headers.items()))

def cached_get_json(url: str, *, ttl: int = CACHE_TTL, auth=None, headers: Optional[Dict[str, str]] = None):
    """
    GET and decode JSON, caching successful answers for `ttl` seconds.
    Returns None on 404; raises RegistryUnavailable on any other failure.
    """
    key = f"{url}||{_hdrsig(headers)}"
    hit = _cache_get(key)
    if hit is not None:
        return hit
    try:
        resp = SESSION.get(url, auth=auth, headers=headers, timeout=REQ_TIMEOUT)
        if resp.status_code == 429:
            time.sleep(BACKOFF)
            resp = SESSION.get(url, auth=auth, headers=headers, timeout=REQ_TIMEOUT)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        print(f"[REGISTRY] GET failed: {type(e).__name__}", flush=True)
        raise RegistryUnavailable(str(e)) from e
    _cache_set(key, data, ttl)
    return data

def clear_cache():
    _CACHE.clear()

# -----------------------------------------------------------------------------
# Name canonicalisation
# -----------------------------------------------------------------------------
LEGAL_SUFFIXES = [
    "limited", "ltd",
    "public limited company", "plc",
    "limited liability partnership", "llp",
    "limited partnership", "lp",
    "community interest company", "cic",
    "charitable incorporated organisation", "cio",
    "charity",
    "foundation",
    "trust",
]

def _strip_legal_suffix(s: str) -> str:
    s = s.strip().lower()
    s = s.replace("&", " and ")
    s = re.sub(r"[^\w\s]", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    changed = True
    while changed and s:
        changed = False
        for suf in LEGAL_SUFFIXES:
            if s.endswith(" " + suf):
                s = s[: -len(suf)].strip()
                changed = True
                break
    return s

def canonicalise_name(name: str) -> str:
    if not name:
        return ""
    name = ''.join(c for c in unicodedata.normalize('NFKD', name) if not unicodedata.combining(c)).lower()
    name = _strip_legal_suffix(name)
    # collapse "k i n d" → "kind"
    if re.fullmatch(r'(?:[a-z]\s+){2,}[a-z]', name):
        name = name.replace(' ', '')
    return name

def similarity(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b).ratio()

def rank_candidates(subject_name: str, candidates: List[RegistryCandidate]) -> List[RegistryCandidate]:
    """Score against the canonical search name, best first. Exact canonical hits score 1.0."""
    canonical_input = canonicalise_name(subject_name)
    scored = []
    for c in candidates:
        canonical_candidate = canonicalise_name(c.name)
        score = 1.0 if canonical_candidate == canonical_input else similarity(canonical_input, canonical_candidate)
        scored.append(c.copy(update={"confidence": round(score, 3)}))
    scored.sort(key=lambda c: c.confidence, reverse=True)
    return scored

# -----------------------------------------------------------------------------
# Companies House
# -----------------------------------------------------------------------------
def _ch_json(path: str):
    return cached_get_json(f"{BASE_URL_CH}{path}", auth=AUTH_CH)

def _company_candidate(item: Dict[str, Any]) -> RegistryCandidate:
    address = item.get("address_snippet")
    if not address and isinstance(item.get("registered_office_address"), dict):
        roa = item["registered_office_address"]
        address = ", ".join(
            str(roa[k]) for k in ("address_line_1", "address_line_2", "locality", "postal_code") if roa.get(k)
        )
    return RegistryCandidate(
        number=item.get("company_number", ""),
        name=item.get("title") or item.get("company_name") or "",
        jurisdiction="GB",
        status=item.get("company_status"),
        address=address or None,
    )

def _search_companies(name: Optional[str], number: Optional[str]) -> List[RegistryCandidate]:
    if number:
        profile = _ch_json(f"/company/{number.strip().upper()}")
        return [_company_candidate(profile).copy(update={"confidence": 1.0})] if profile else []
    q = requests.utils.quote(name.strip())
    data = _ch_json(f"/search/companies?q={q}&items_per_page={SEARCH_LIMIT}") or {}
    return rank_candidates(name, [_company_candidate(i) for i in data.get("items", []) if i.get("company_number")])

def get_company_record(company_number: str) -> dict:
    if not company_number or not company_number.strip():
        raise ValueError("company_number is required")
    company_number = company_number.strip().upper()
    prof = _ch_json(f"/company/{company_number}")
    if prof is None:
        return {}
    officers = _ch_json(f"/company/{company_number}/officers") or {}
    pscs     = _ch_json(f"/company/{company_number}/persons-with-significant-control") or {}
    return {
        "company_number": company_number,
        "retrieved_at": datetime.now(timezone.utc).isoformat(),
        "sources": {
            "profile":  f"{BASE_URL_CH}/company/{company_number}",
            "officers": f"{BASE_URL_CH}/company/{company_number}/officers",
            "pscs":     f"{BASE_URL_CH}/company/{company_number}/persons-with-significant-control",
        },
        "profile": prof,
        "officers": officers,
        "pscs": pscs,
    }

# -----------------------------------------------------------------------------
# Charity Commission
# -----------------------------------------------------------------------------
def _cc_json(path: str):
    headers = {"Accept": "application/json"}
    if CHARITY_API_KEY:
        headers["Ocp-Apim-Subscription-Key"] = CHARITY_API_KEY
    return cached_get_json(f"{BASE_URL_CCEW}/{path.lstrip('/')}", headers=headers)

def _charity_candidate(item: Dict[str, Any]) -> RegistryCandidate:
    return RegistryCandidate(
        number=str(item.get("reg_charity_number") or item.get("charity_number") or ""),
        name=item.get("charity_name") or item.get("name") or "",
        jurisdiction="GB",
        status=item.get("reg_status") or item.get("status"),
    )

def _search_charities(name: Optional[str], number: Optional[str]) -> List[RegistryCandidate]:
    if number:
        detail = _cc_json(f"allcharitydetails/{number.strip()}/0")
        return [_charity_candidate(detail).copy(update={"confidence": 1.0})] if detail else []
    found = _cc_json(f"searchCharityName/{requests.utils.quote(name.strip())}") or []
    return rank_candidates(name, [_charity_candidate(i) for i in found][:SEARCH_LIMIT])

def get_charity_record(charity_number: str) -> dict:
    if not charity_number or not str(charity_number).strip():
        raise ValueError("charity_number is required")
    reg = str(charity_number).strip()
    detail = _cc_json(f"allcharitydetails/{reg}/0")
    if detail is None:
        return {}
    trustees = _cc_json(f"charitytrusteeinformation/{reg}/0") or []
    return {
        "charity_number": reg,
        "retrieved_at": datetime.now(timezone.utc).isoformat(),
        "profile": detail,
        "trustees": [{"name": t.get("trustee_name")} for t in trustees if t.get("trustee_name")],
    }

# -----------------------------------------------------------------------------
# Public entry points
# -----------------------------------------------------------------------------
def search_registry(jurisdiction: str, name: Optional[str] = None, number: Optional[str] = None,
                    entity_kind: EntityKind = EntityKind.BUSINESS) -> List[RegistryCandidate]:
    """
    Look a company (or charity) up in the UK registers. A number beats a name.
    Other jurisdictions have no registry wired up and return nothing.
    """
    name, number = (name or "").strip(), (number or "").strip()
    if not name and not number:
        raise ValueError("a name or number is required to search")
    match = resolve_jurisdiction(jurisdiction)
    if match.degraded or match.two_letter != "GB":
        print(f"[REGISTRY] No registry for jurisdiction {jurisdiction!r}; returning no candidates", flush=True)
        return []
    by = "number" if number else "name"
    if entity_kind == EntityKind.CHARITY:
        found = _search_charities(name, number)
    else:
        found = _search_companies(name, number)
    print(f"[REGISTRY] {entity_kind.value} search by {by}: {len(found)} candidate(s)", flush=True)
    return found

def link_record(candidate: RegistryCandidate, entity_kind: EntityKind = EntityKind.BUSINESS) -> LinkedRecord:
    """Confirm a search result: fetch the full record so it can be stored as the link."""
    if entity_kind == EntityKind.CHARITY:
        data = get_charity_record(candidate.number)
        name = (data.get("profile") or {}).get("charity_name")
    else:
        data = get_company_record(candidate.number)
        name = (data.get("profile") or {}).get("company_name")
    if not data:
        raise RegistryUnavailable(f"record {candidate.number} was not found")
    print(f"[REGISTRY] Linked {entity_kind.value} {candidate.number}", flush=True)
    return LinkedRecord(
        number=candidate.number,
        name=name or candidate.name,
        jurisdiction=candidate.jurisdiction,
        provider_id=candidate.provider_id,
        data=data,
    )
