from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ErrorResponse(BaseModel):
    detail: str
    trace_id: str


class HealthResponse(BaseModel):
    status: str = "ok"


class SuccessResponse(BaseModel):
    success: bool = True
