from pydantic import BaseModel, ConfigDict, Field


# =========================
# Schemas
# =========================
class SessionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_resume: str = Field(alias="originalResume")
    tailored_resume: str = Field(alias="tailoredResume")

class GenerateResponse(BaseModel):
    original: str
    tailored: str

class ErrorResponse(BaseModel):
    error: str
