from pydantic import BaseModel, ConfigDict

class RelationResponse(BaseModel):
    """Type de relation du catalogue"""
    id: int
    label: str
    opposite_id: int

    model_config = ConfigDict(from_attributes=True)
