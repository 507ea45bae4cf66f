from pydantic import BaseModel


class GenerateRequest(BaseModel):
    text: str = ""


class GenerateResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str
