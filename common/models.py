from pydantic import BaseModel, Field
from typing import Optional, Dict


class StyleQuery(BaseModel):
    style: str = ""
    style_xml: Optional[str] = Field(default=None, alias="styleXml")

    model_config = {"populate_by_name": True}


class ResolvedStyle(BaseModel):
    style: str
    short_name: str
    host: str
    url: str
    hops: int = 0


class HealthStatus(BaseModel):
    status: str
    service: str
    registry: Dict[str, int]
