"""
Endpoint configuration domain models.

A config document describes one API version: a label plus an ordered list
of named HTTP calls. Both models are immutable once loaded.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# Parsed JSON value. Config and responses are schema-free by design.
JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

# Authorization, Cookie, X-Api-Key, X-Auth-Token, Client-Secret, ...
_CREDENTIAL_HEADER = re.compile(
    r"authorization|cookie|token|secret|password|(^|-)key$", re.IGNORECASE
)


@dataclass(frozen=True)
class ApiEndpointConfig:
    """
    One named HTTP call definition.

    Attributes:
        name: Unique name within a document; used as the response file name
        url: Absolute request URL
        method: HTTP method, upper-cased (GET sends no body)
        headers: Headers forwarded verbatim
        params: Request body for non-GET methods
    """

    name: str
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiEndpointConfig":
        """
        Create an endpoint from one entry of the config ``apis`` array.

        Args:
            data: Dictionary with name, url, method, headers and optional params

        Returns:
            ApiEndpointConfig instance
        """
        return cls(
            name=str(data["name"]),
            url=str(data["url"]),
            method=str(data.get("method") or "GET").upper(),
            headers={str(k): str(v) for k, v in (data.get("headers") or {}).items()},
            params=data.get("params"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the config file representation."""
        data: Dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "method": self.method,
            "headers": dict(self.headers),
        }
        if self.params is not None:
            data["params"] = self.params
        return data

    def request_body(self) -> Optional[Dict[str, Any]]:
        """Body sent with the request: none for GET, ``params`` (or {}) otherwise."""
        if self.method == "GET":
            return None
        return self.params if self.params is not None else {}


@dataclass(frozen=True)
class ApiConfigDocument:
    """A version label and its ordered endpoint definitions."""

    version: str
    apis: Tuple[ApiEndpointConfig, ...]
    source_path: Optional[str] = None

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], source_path: Optional[str] = None
    ) -> "ApiConfigDocument":
        return cls(
            version=str(data["version"]),
            apis=tuple(ApiEndpointConfig.from_dict(api) for api in data.get("apis", [])),
            source_path=source_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"version": self.version, "apis": [api.to_dict() for api in self.apis]}

    def duplicate_names(self) -> List[str]:
        """
        Return API names that appear more than once.

        Duplicates share an output file, so the later response overwrites
        the earlier one.
        """
        seen = set()
        duplicates: List[str] = []
        for api in self.apis:
            if api.name in seen and api.name not in duplicates:
                duplicates.append(api.name)
            seen.add(api.name)
        return duplicates

    def credential_header_values(self) -> List[str]:
        """Values of credential-like headers across endpoints (used for log redaction)."""
        return [
            value
            for api in self.apis
            for header, value in api.headers.items()
            if _CREDENTIAL_HEADER.search(header)
        ]
