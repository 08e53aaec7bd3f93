from __future__ import annotations

from pydantic import BaseModel


class LoginFailure(BaseModel):
    incorrect: bool = True

    model_config = {
        "json_schema_extra": {
            "example": {"incorrect": True}
        }
    }
