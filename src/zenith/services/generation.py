"""
Image generation services

Unified dispatcher between the API endpoints (or the client orchestrator) and
the provider drivers.

Responsibilities:
- Resolve legacy provider aliases and model aliases to canonical ids
- Select the credential that belongs to the resolved provider
- Validate the request against the model's declared features
- Collapse every driver failure into the `{success: false, error}` shape
"""

import logging
from typing import Optional, Union

from pydantic import ValidationError

from zenith.errors import InvalidRequest, UnknownModel, UnknownProvider
from zenith.providers import DRIVERS, ImageProvider
from zenith.registry import get_model_config, get_provider_config, resolve_model, resolve_provider
from zenith.schemas import ApiFailure, ApiResponse, ApiSuccess, AuthTokens, GenerateRequest

logger = logging.getLogger(__name__)

# Which AuthTokens field feeds each auth header
TOKEN_FIELDS = {
    "X-API-Key": "api_key",
    "X-HF-Token": "hf_token",
}


def select_token(provider_id: str, tokens: Optional[AuthTokens]) -> Optional[str]:
    """Return the credential for the resolved provider, never another provider's."""
    provider_config = get_provider_config(provider_id)
    if provider_config is None or tokens is None:
        return None
    token = getattr(tokens, TOKEN_FIELDS[provider_config.auth_header])
    return token.strip() if token and token.strip() else None


def build_auth_headers(provider: str, tokens: Optional[AuthTokens]) -> dict[str, str]:
    """Headers a client sends to the generate endpoint for this provider."""
    provider_id, _ = resolve_provider(provider)
    token = select_token(provider_id, tokens) if provider_id else None
    if not token:
        return {}
    return {get_provider_config(provider_id).auth_header: token}


def resolve_request(provider: str, request: GenerateRequest) -> GenerateRequest:
    """Return a copy of request carrying canonical provider and model ids."""
    provider_id, pinned_model = resolve_provider(provider)
    if provider_id is None:
        raise UnknownProvider(provider)

    requested_model = pinned_model or request.model
    model_id = resolve_model(provider_id, requested_model)
    if model_id is None:
        raise UnknownModel(requested_model, provider_id)

    steps = get_model_config(model_id).features.steps
    if request.steps is not None and not steps.min <= request.steps <= steps.max:
        raise InvalidRequest(f"Steps must be between {steps.min} and {steps.max}")

    return request.model_copy(update={"provider": provider_id, "model": model_id})


async def dispatch(
    provider: str,
    request: Union[GenerateRequest, dict],
    tokens: Optional[AuthTokens] = None,
) -> ApiResponse:
    if not isinstance(request, GenerateRequest):
        try:
            request = GenerateRequest.model_validate({"provider": provider, **request})
        except ValidationError as e:
            logger.warning("Invalid generate request for %s: %s", provider, e)
            return ApiFailure(error=f"Invalid request: {e.errors()[0]['msg']}")

    try:
        request = resolve_request(provider, request)
        driver: ImageProvider = DRIVERS[request.provider]
        data = await driver.generate(request, select_token(request.provider, tokens))
        return ApiSuccess(data=data)
    except Exception as e:
        logger.warning("Generation with %s failed: %s: %s", provider, type(e).__name__, e)
        return ApiFailure(error=str(e) or type(e).__name__)
