"""Pydantic schemas for upload policy requests."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadFile(BaseModel):
    """
    Description of the file to be uploaded.

    Attributes:
        type: File kind understood by the service ("image", "generic")
        filename: Optional original file name
        content_type: Optional MIME type, sent as contentType
        bytes: File size in bytes
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., min_length=1, description="File kind")
    filename: Optional[str] = Field(None, description="Original file name")
    content_type: Optional[str] = Field(
        None, alias="contentType", description="MIME type"
    )
    bytes: int = Field(..., ge=0, description="File size in bytes")


class UploadProps(BaseModel):
    """
    Upload metadata sent alongside the auth token.

    Attributes:
        path: Location key the file will be uploaded to
        file: Description of the file
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "path": "articles/123",
                "file": {
                    "type": "generic",
                    "filename": "1kbfile.txt",
                    "contentType": "text/plain",
                    "bytes": 1024,
                },
            }
        },
    )

    path: str = Field(..., description="Upload location key")
    file: UploadFile = Field(..., description="File descriptor")

    def to_request_body(self) -> Dict[str, Any]:
        """Serialize with wire field names, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)
