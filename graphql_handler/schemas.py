import json
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphQLParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    query: Optional[str] = Field(None, description="GraphQL source document")
    variables: Optional[Dict[str, Any]] = Field(None, description="Variable values for the operation")
    operation_name: Optional[str] = Field(
        None,
        alias="operationName",
        description="Operation to run when the document holds several",
    )

    @field_validator("variables", mode="before")
    @classmethod
    def _decode_variables(cls, value: Any) -> Any:
        # GET query parameters carry variables as a JSON string
        if isinstance(value, str):
            if not value.strip():
                return None
            return json.loads(value)
        return value


class ProxyResponse(BaseModel):
    status_code: int = Field(..., alias="statusCode")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
