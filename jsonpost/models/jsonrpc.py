"""JSON-RPC 2.0 envelopes exchanged over a simplex transport."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

# Error code reported for failures injected through the mock transport.
SERVER_ERROR_CODE = -32000


class JsonRpcRequest(BaseModel):
    """A JSON-RPC request as received by a transport."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: Any = None
    id: Any = None


class JsonRpcErrorObject(BaseModel):
    code: int = SERVER_ERROR_CODE
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class JsonRpcResponse(BaseModel):
    """A JSON-RPC response carrying either a ``result`` or an ``error``."""

    jsonrpc: Literal["2.0"] = "2.0"
    result: Any = None
    error: JsonRpcErrorObject | None = None
    id: Any = None

    def to_json(self) -> str:
        if self.error is not None:
            return self.model_dump_json(exclude={"result"})
        return self.model_dump_json(exclude={"error"})
