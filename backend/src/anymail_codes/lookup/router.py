"""Lookup API endpoint.

One catch-all route serves the whole surface:

    GET /                    -> {"domains": [...]}
    GET /<urlencoded-email>  -> {"code": "..."} (404 with empty code if none)

Checks run in a fixed order: method (405), access key (401), route.
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response, status

from ..auth.access_key import get_access_key, is_authorized
from ..codes.extractor import build_key, extract_email_address
from ..config import Settings
from ..dependencies import get_app_settings, get_code_store
from ..domain.ports.code_store_port import CodeStoreError, CodeStorePort
from .responses import error_response, json_response
from .routing import AddressLookupRoute, DomainListRoute, decode_token, parse_route
from .schemas import CodeResponse, DomainListResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Lookup"])

LOOKUP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _raw_path(request: Request) -> str:
    """Request path with its original percent-encoding."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return quote(request.url.path, safe="/@")


async def _lookup_code(route: AddressLookupRoute, code_store: CodeStorePort) -> Response:
    email = extract_email_address(decode_token(route.token))
    if not email:
        return error_response("invalid email", status.HTTP_400_BAD_REQUEST)

    try:
        code = await code_store.get(build_key(email))
    except CodeStoreError as e:
        logger.error(f"Code store read failed: {e}")
        return error_response("store unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)

    if not code:
        return json_response(CodeResponse(code=""), status.HTTP_404_NOT_FOUND)
    return json_response(CodeResponse(code=code))


@router.api_route("/{path:path}", methods=LOOKUP_METHODS, include_in_schema=False)
async def lookup(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    code_store: CodeStorePort = Depends(get_code_store),
) -> Response:
    """Serve the domain list or the current code for an address."""
    if request.method != "GET":
        return error_response("method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)

    access_key = get_access_key(request.headers.get("authorization"))
    if not is_authorized(access_key, settings.ACCESS_KEY):
        logger.info("Rejected lookup with missing or invalid access key")
        return error_response("unauthorized", status.HTTP_401_UNAUTHORIZED)

    route = parse_route(_raw_path(request))
    if isinstance(route, DomainListRoute):
        return json_response(DomainListResponse(domains=settings.allowed_domains))
    return await _lookup_code(route, code_store)
