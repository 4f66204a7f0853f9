# budget_manager/schemas/common.py
from pydantic import BaseModel

class Message(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
