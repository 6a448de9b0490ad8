from pydantic import BaseModel


class ChordPosition(BaseModel):
    chord: str
    position: int
