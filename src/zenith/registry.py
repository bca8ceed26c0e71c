"""
Static provider and model registries

Immutable tables describing which backends exist, how they authenticate and
which models each of them serves, plus the lookups used by the dispatcher.

Responsibilities:
- Map provider ids to endpoint, auth requirement and auth header
- Map model ids to their provider and feature flags
- Resolve legacy provider aliases and per-provider model aliases
"""

from dataclasses import dataclass
from typing import Optional

from zenith.config import GITEE_BASE_URL, HF_SPACES


@dataclass(frozen=True)
class StepRange:
    min: int
    max: int
    default: int


@dataclass(frozen=True)
class ModelFeatures:
    negative_prompt: bool
    steps: StepRange
    seed: bool


@dataclass(frozen=True)
class ModelConfig:
    id: str
    name: str
    provider: str
    features: ModelFeatures


@dataclass(frozen=True)
class ProviderConfig:
    id: str
    name: str
    requires_auth: bool
    auth_header: str
    base_url: str


PROVIDER_CONFIGS: dict[str, ProviderConfig] = {
    "gitee": ProviderConfig(
        id="gitee",
        name="Gitee AI",
        requires_auth=True,
        auth_header="X-API-Key",
        base_url=GITEE_BASE_URL,
    ),
    "huggingface": ProviderConfig(
        id="huggingface",
        name="HuggingFace",
        requires_auth=False,
        auth_header="X-HF-Token",
        base_url=HF_SPACES["zImage"],
    ),
}

# The first model listed for a provider is its default.
MODEL_CONFIGS: tuple[ModelConfig, ...] = (
    ModelConfig(
        id="z-image-turbo",
        name="Z-Image Turbo",
        provider="gitee",
        features=ModelFeatures(
            negative_prompt=True, steps=StepRange(min=1, max=50, default=9), seed=True
        ),
    ),
    ModelConfig(
        id="z-image",
        name="Z-Image Turbo",
        provider="huggingface",
        features=ModelFeatures(
            negative_prompt=False, steps=StepRange(min=1, max=20, default=8), seed=True
        ),
    ),
    ModelConfig(
        id="qwen",
        name="Qwen Image",
        provider="huggingface",
        features=ModelFeatures(
            negative_prompt=False, steps=StepRange(min=1, max=20, default=8), seed=True
        ),
    ),
)

# Legacy provider names accepted at the boundary: alias -> (provider, pinned model)
PROVIDER_ALIASES: dict[str, tuple[str, Optional[str]]] = {
    "hf-zimage": ("huggingface", "z-image"),
    "hf-qwen": ("huggingface", "qwen"),
}

MODEL_ALIASES: dict[str, dict[str, str]] = {
    "huggingface": {"z-image-turbo": "z-image", "zimage": "z-image"},
}

# Display names for every id a client may select, aliases included
PROVIDER_DISPLAY_NAMES: dict[str, str] = {
    "gitee": "Gitee AI",
    "huggingface": "HuggingFace",
    "hf-zimage": "HF Z-Image",
    "hf-qwen": "HF Qwen",
}


def get_provider_config(provider_id: str) -> Optional[ProviderConfig]:
    return PROVIDER_CONFIGS.get(provider_id)


def get_models_by_provider(provider_id: str) -> list[ModelConfig]:
    return [m for m in MODEL_CONFIGS if m.provider == provider_id]


def get_model_config(model_id: str) -> Optional[ModelConfig]:
    for model in MODEL_CONFIGS:
        if model.id == model_id:
            return model
    return None


def get_model_by_provider_and_id(provider_id: str, model_id: str) -> Optional[ModelConfig]:
    for model in MODEL_CONFIGS:
        if model.provider == provider_id and model.id == model_id:
            return model
    return None


def resolve_provider(provider_id: str) -> tuple[Optional[str], Optional[str]]:
    """
    Return (canonical provider id, pinned model id) for a provider id or alias.

    The canonical id is None when the identifier is unknown.
    """
    if provider_id in PROVIDER_CONFIGS:
        return provider_id, None
    return PROVIDER_ALIASES.get(provider_id, (None, None))


def resolve_model(provider_id: str, model_id: Optional[str]) -> Optional[str]:
    """
    Return the canonical model id served by provider_id.

    An empty model id selects the provider's default model. None is returned
    when the model is not registered for that provider.
    """
    if not model_id:
        models = get_models_by_provider(provider_id)
        return models[0].id if models else None
    model_id = MODEL_ALIASES.get(provider_id, {}).get(model_id, model_id)
    if get_model_by_provider_and_id(provider_id, model_id) is None:
        return None
    return model_id
