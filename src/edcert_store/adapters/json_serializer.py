"""
JSON text serializer adapter — implements CertificateSerializer with pydantic.

`model_dump_json` / `model_validate_json` give a bijective JSON form for any
pydantic certificate model. Validation errors propagate as
pydantic.ValidationError; the codec maps them to MALFORMED_CERTIFICATE.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


class PydanticJsonSerializer(Generic[M]):
    """
    Serialize a pydantic certificate model to JSON text and back.

    Implements the CertificateSerializer port.
    """

    def __init__(self, model: type[M]) -> None:
        self._model = model

    def to_text(self, cert: M) -> str:
        return cert.model_dump_json()

    def from_text(self, text: str) -> M:
        return self._model.model_validate_json(text)
