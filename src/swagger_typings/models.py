"""
Data models for Swagger documents and the resources they belong to.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_VERBS = ("get", "post", "put", "delete")


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Resource(_Model):
    """One API endpoint discovered under a named source group."""

    source: str
    name: str
    url: str
    location: Optional[str] = None
    swagger_version: Optional[str] = Field(None, alias="swaggerVersion")


class ItemDescriptor(_Model):
    """Element shape of an array property."""

    type: Any = None
    ref: Optional[str] = Field(None, alias="$ref")


class PropertyDescriptor(_Model):
    """Shape of a single model property (or a response/body schema)."""

    description: Optional[str] = None
    type: Any = None
    ref: Optional[str] = Field(None, alias="$ref")
    items: Optional[ItemDescriptor] = None


class ModelSchema(_Model):
    """A named structural type from the document's definitions."""

    type: Any = None
    title: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, PropertyDescriptor] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    @property
    def is_object(self) -> bool:
        if self.type == "object":
            return True
        return self.type is None and bool(self.properties)


class ParameterItems(_Model):
    type: Any = None
    format: Optional[str] = None
    enum: Optional[List[Any]] = None


class Parameter(_Model):
    """A single operation parameter."""

    name: str
    location: str = Field("query", alias="in")
    description: Optional[str] = None
    required: bool = False
    type: Any = None
    collection_format: Optional[str] = Field(None, alias="collectionFormat")
    items: Optional[ParameterItems] = None
    enum: Optional[List[Any]] = None
    schema_: Optional[PropertyDescriptor] = Field(None, alias="schema")


class Response(_Model):
    description: Optional[str] = None
    schema_: Optional[PropertyDescriptor] = Field(None, alias="schema")


class Operation(_Model):
    """One HTTP verb handler on one path."""

    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(None, alias="operationId")
    tags: List[str] = Field(default_factory=list)
    parameters: List[Parameter] = Field(default_factory=list)
    responses: Dict[str, Response] = Field(default_factory=dict)

    @field_validator("responses", mode="before")
    @classmethod
    def _status_keys_as_strings(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(status): response for status, response in value.items()}
        return value

    @property
    def comment(self) -> Optional[str]:
        return self.description or self.summary or None


class Info(_Model):
    title: str = ""
    description: str = ""


class Document(_Model):
    """The full API description for one Resource."""

    info: Info = Field(default_factory=Info)
    definitions: Optional[Dict[str, ModelSchema]] = None
    paths: Optional[Dict[str, Dict[str, Operation]]] = None
    resource: Resource

    @field_validator("paths", mode="before")
    @classmethod
    def _keep_known_verbs(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            path: {
                verb: operation
                for verb, operation in item.items()
                if verb in HTTP_VERBS
            }
            if isinstance(item, dict)
            else {}
            for path, item in value.items()
        }

    @property
    def title(self) -> str:
        return self.info.title

    @property
    def description(self) -> str:
        return self.info.description
