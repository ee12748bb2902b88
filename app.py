# app.py
import os
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from address_lookup import AddressLookupUnavailable, get_address, search_addresses
from auth_middleware import verify_api_key
from configuration import derive_configuration
from models import Answers, CheckSelection, ClientContext, EntityKind, RegistryCandidate
from normalizer import MalformedAddress
from reference_data import (
    ADDRESS_COUNTRIES,
    JURISDICTIONS,
    PHONE_COUNTRY_CODES,
    REFERENCE_DATA_VERSION,
)
from registry_client import (
    RegistryUnavailable,
    get_charity_record,
    get_company_record,
    link_record,
    search_registry,
)
from request_builder import BuildError, InvalidAnswers, build, build_search_request
from security import RATE_LIMIT, get_security_headers, limiter
from validation import validate

load_dotenv()

DEFAULT_JURISDICTION = os.getenv("DEFAULT_JURISDICTION", "GB")

# ---------------- App Setup ----------------
app = FastAPI(title="Check Configuration & Validation Engine")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

print(f"[BOOT] app loaded | reference data {REFERENCE_DATA_VERSION} | default jurisdiction {DEFAULT_JURISDICTION}", flush=True)

# ---------------- Middleware ----------------
@app.middleware("http")
async def security_headers_everywhere(request: Request, call_next):
    response = await call_next(request)
    for k, v in get_security_headers().items():
        response.headers[k] = v
    return response

# ---------------- Request bodies ----------------
class EngineRequest(BaseModel):
    context: Optional[ClientContext] = None
    selection: CheckSelection = Field(default_factory=CheckSelection)
    answers: Optional[Answers] = None


class SearchRequestBody(BaseModel):
    jurisdiction: str = DEFAULT_JURISDICTION
    name: Optional[str] = None
    number: Optional[str] = None


class LinkRequestBody(BaseModel):
    candidate: RegistryCandidate
    entity_kind: EntityKind = EntityKind.BUSINESS


def _collaborator_failed(source: str, e: Exception) -> JSONResponse:
    print(f"[API] {source} unavailable: {e}", flush=True)
    return JSONResponse(content={"error": f"{source} is unavailable, please try again"}, status_code=502)

# ---------------- Engine ----------------
@app.post("/api/configuration", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_configuration(request: Request, body: EngineRequest):
    """Check types, modes, options and defaults for this client."""
    config = derive_configuration(body.context, body.selection, body.answers)
    return JSONResponse(content=jsonable_encoder(config))


@app.post("/api/validate", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_validate(request: Request, body: EngineRequest):
    result = validate(body.context, body.selection, body.answers or Answers())
    print(f"[API] validate: valid={result.valid} violations={len(result.violations)}", flush=True)
    return JSONResponse(content=jsonable_encoder(result))


@app.post("/api/build", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_build(request: Request, body: EngineRequest):
    """Validated answers in, ordered provider payloads out."""
    try:
        payloads = build(body.context, body.selection, body.answers or Answers())
    except InvalidAnswers as e:
        return JSONResponse(
            content={"error": "Answers are not valid", "violations": jsonable_encoder(e.result.violations)},
            status_code=422,
        )
    except BuildError as e:
        print(f"[API] build refused: {type(e).__name__} ({e.sub_option})", flush=True)
        return JSONResponse(
            content={"error": type(e).__name__, "sub_option": e.sub_option, "message": str(e)},
            status_code=409,
        )
    return JSONResponse(content={"payloads": jsonable_encoder(payloads)})


@app.post("/api/registry/search-request", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_registry_search_request(request: Request, body: SearchRequestBody):
    try:
        return JSONResponse(content=build_search_request(body.jurisdiction, body.name, body.number))
    except ValueError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)

# ---------------- Reference data ----------------
@app.get("/api/reference/jurisdictions", dependencies=[Depends(verify_api_key)])
def api_jurisdictions():
    return JSONResponse(content={
        "version": REFERENCE_DATA_VERSION,
        "jurisdictions": [{"code": code, "name": name} for code, name in JURISDICTIONS],
    })


@app.get("/api/reference/countries", dependencies=[Depends(verify_api_key)])
def api_countries():
    return JSONResponse(content={
        "version": REFERENCE_DATA_VERSION,
        "countries": [{"code": code, "name": name} for code, name in ADDRESS_COUNTRIES],
    })


@app.get("/api/reference/phone-codes", dependencies=[Depends(verify_api_key)])
def api_phone_codes():
    return JSONResponse(content={
        "version": REFERENCE_DATA_VERSION,
        "phone_codes": [{"country": two, "code": code, "name": name} for two, code, name in PHONE_COUNTRY_CODES],
    })

# ---------------- Address lookup ----------------
@app.get("/api/address/search", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_address_search(request: Request, term: str = Query(..., min_length=1)):
    try:
        return JSONResponse(content={"suggestions": search_addresses(term)})
    except AddressLookupUnavailable as e:
        return _collaborator_failed("Address lookup", e)


@app.get("/api/address/{address_id}", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_address_get(request: Request, address_id: str):
    try:
        address = get_address(address_id)
    except AddressLookupUnavailable as e:
        return _collaborator_failed("Address lookup", e)
    except MalformedAddress as e:
        return JSONResponse(content={"error": f"Address could not be read: {e}"}, status_code=422)
    return JSONResponse(content=jsonable_encoder(address))

# ---------------- Registry ----------------
@app.get("/api/registry/search", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_registry_search(
    request: Request,
    jurisdiction: str = Query(DEFAULT_JURISDICTION),
    name: Optional[str] = None,
    number: Optional[str] = None,
    entity_kind: EntityKind = EntityKind.BUSINESS,
):
    try:
        candidates = search_registry(jurisdiction, name=name, number=number, entity_kind=entity_kind)
    except ValueError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)
    except RegistryUnavailable as e:
        return _collaborator_failed("Registry", e)
    return JSONResponse(content={"candidates": jsonable_encoder(candidates)})


@app.post("/api/registry/link", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_registry_link(request: Request, body: LinkRequestBody):
    """Confirm a selected search result; the answer is the linked record to send back on build."""
    try:
        record = link_record(body.candidate, body.entity_kind)
    except RegistryUnavailable as e:
        return _collaborator_failed("Registry", e)
    return JSONResponse(content=jsonable_encoder(record))


@app.get("/api/registry/company/{number}", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_registry_company(request: Request, number: str):
    try:
        record = get_company_record(number)
    except RegistryUnavailable as e:
        return _collaborator_failed("Registry", e)
    if not record:
        return JSONResponse(content={"error": "Company not found"}, status_code=404)
    return JSONResponse(content=record)


@app.get("/api/registry/charity/{number}", dependencies=[Depends(verify_api_key)])
@limiter.limit(RATE_LIMIT)
def api_registry_charity(request: Request, number: str):
    try:
        record = get_charity_record(number)
    except RegistryUnavailable as e:
        return _collaborator_failed("Registry", e)
    if not record:
        return JSONResponse(content={"error": "Charity not found"}, status_code=404)
    return JSONResponse(content=record)

# ---------------- Health ----------------
@app.get("/health")
def health():
    return {"status": "ok", "reference_data": REFERENCE_DATA_VERSION}
