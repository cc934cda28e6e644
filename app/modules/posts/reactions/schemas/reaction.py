from pydantic import BaseModel, ConfigDict

class ReactionCreate(BaseModel):
    # Checked by the service against the closed sets, so a bad value is a 400
    target_type: str
    target_id: int = 0
    value: int = 0

class Reaction(BaseModel):
    """Reaction model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    target_type: str
    target_id: int
    value: int
