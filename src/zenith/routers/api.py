from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse

from zenith.registry import MODEL_CONFIGS, PROVIDER_CONFIGS
from zenith.schemas import (ApiResponse, AuthTokens, GenerateRequest,
                            LegacyGenerateRequest, UpscaleRequest)
from zenith.services.generation import dispatch
from zenith.services.images import upscale_image

router = APIRouter()


def to_http_response(result: ApiResponse) -> JSONResponse:
    if result.success:
        return JSONResponse(content=result.data.model_dump(exclude_none=True))
    return JSONResponse(status_code=500, content={"error": result.error})


@router.post("/generate")
async def generate_image(
    req: GenerateRequest,
    x_api_key: Optional[str] = Header(None),
    x_hf_token: Optional[str] = Header(None),
):
    tokens = AuthTokens(api_key=x_api_key, hf_token=x_hf_token)
    return to_http_response(await dispatch(req.provider, req, tokens))


@router.post("/generate-hf")
async def generate_image_hf(
    req: LegacyGenerateRequest,
    x_hf_token: Optional[str] = Header(None),
):
    """HuggingFace-only endpoint kept for older clients."""
    request = GenerateRequest(provider="huggingface", **req.model_dump())
    tokens = AuthTokens(hf_token=x_hf_token)
    return to_http_response(await dispatch("huggingface", request, tokens))


@router.post("/upscale")
async def upscale(req: UpscaleRequest, x_hf_token: Optional[str] = Header(None)):
    return to_http_response(await upscale_image(req.url, req.scale, x_hf_token))


@router.get("/providers")
async def list_providers():
    return [
        {
            "id": p.id,
            "name": p.name,
            "requiresAuth": p.requires_auth,
            "authHeader": p.auth_header,
        }
        for p in PROVIDER_CONFIGS.values()
    ]


@router.get("/models")
async def list_models(provider: Optional[str] = None):
    return [
        {
            "id": m.id,
            "name": m.name,
            "provider": m.provider,
            "features": {
                "negativePrompt": m.features.negative_prompt,
                "steps": {
                    "min": m.features.steps.min,
                    "max": m.features.steps.max,
                    "default": m.features.steps.default,
                },
                "seed": m.features.seed,
            },
        }
        for m in MODEL_CONFIGS
        if provider is None or m.provider == provider
    ]


def get_router():
    return router
