"""Parsed composite API key model."""

from pydantic import BaseModel, ConfigDict, Field


class ApiKeyParts(BaseModel):
    """
    The three parts of a composite API key.

    Attributes:
        key_type: Preamble tag, always "PRTV" for a valid key
        key_id: Public key identifier, placed in the token header as kid
        secret_key: Shared secret used to sign auth tokens
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "key_type": "PRTV",
                "key_id": "CfTDX9cq282nQV3K",
                "secret_key": "nJF2aDL4Nf41L3D5Nh8QJtosN0cJvlL0",
            }
        },
    )

    key_type: str = Field(..., description="API key preamble tag")
    key_id: str = Field(..., description="API key identifier")
    secret_key: str = Field(
        ..., repr=False, description="API secret key (never logged)"
    )
