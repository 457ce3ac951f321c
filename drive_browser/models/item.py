"""Drive item models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ItemView(BaseModel):
    """Item as listed inside a folder."""

    id: str = Field(..., description="Drive item id")
    name: str = Field(..., description="Display name")
    kind: Optional[str] = Field(None, description="MIME type; folders use the folder kind")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "1aB2cD3eF",
                "name": "Report.pdf",
                "kind": "application/pdf"
            }
        }
    )


class SearchHit(BaseModel):
    """Item returned by a name search, with its containing folder."""

    id: str = Field(..., description="Drive item id")
    name: str = Field(..., description="Display name")
    kind: Optional[str] = Field(None, description="MIME type; folders use the folder kind")
    parent_id: Optional[str] = Field(
        None,
        serialization_alias="parentId",
        description="Id of the containing folder"
    )


class Breadcrumb(BaseModel):
    """One step of the path from the root to a folder."""

    id: str = Field(..., description="Folder id")
    name: str = Field(..., description="Folder display name")
