"""
Data models and validation

Defines the Pydantic schemas used to:
- Validate the input data of the endpoints and of the dispatcher
- Carry the unified success/failure result shape between layers
- Document the API automatically through OpenAPI
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateRequest(CamelModel):
    provider: str
    model: Optional[str] = None
    prompt: str
    negative_prompt: Optional[str] = None
    width: int = Field(1024, gt=0)
    height: int = Field(1024, gt=0)
    steps: Optional[int] = None
    seed: Optional[int] = None


class LegacyGenerateRequest(CamelModel):
    prompt: str
    width: int = Field(1024, gt=0)
    height: int = Field(1024, gt=0)
    model: Optional[str] = None
    seed: Optional[int] = None


class AuthTokens(CamelModel):
    api_key: Optional[str] = None
    hf_token: Optional[str] = None


class GenerateSuccess(BaseModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    seed: Optional[int] = None

    @model_validator(mode="after")
    def check_image_present(self):
        if not self.url and not self.b64_json:
            raise ValueError("either url or b64_json must be present")
        return self


class UpscaleRequest(BaseModel):
    url: str
    scale: int = Field(4, gt=0)


class UpscaleResponse(BaseModel):
    url: str


class ApiSuccess(BaseModel):
    success: Literal[True] = True
    data: Union[GenerateSuccess, UpscaleResponse]


class ApiFailure(BaseModel):
    success: Literal[False] = False
    error: str


ApiResponse = Union[ApiSuccess, ApiFailure]

api_response_adapter = TypeAdapter(ApiResponse)
