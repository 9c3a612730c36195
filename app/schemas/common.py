from pydantic import BaseModel


class Message(BaseModel):
    message: str


class ReorderResult(BaseModel):
    message: str
    skipped_ids: list[int] = []
