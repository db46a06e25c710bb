"""
terrascope/parser/tfstate.py

Decodes a raw `.tfstate` payload into a `TerraformState`.

Only two fields are required beyond well-formed JSON of the right shape:
a non-zero `version` and a non-empty `terraform_version`. Every failure is
raised as a subclass of `TfstateError`, so callers can treat the whole family
as "bad input" with one except clause.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union

from terrascope.models.terraform_state import TerraformState
from terrascope.models.validator import validate_type

logger = logging.getLogger(__name__)


class TfstateError(ValueError):
    """Base class for every state decoding failure."""


class EmptyInputError(TfstateError):
    def __init__(self) -> None:
        super().__init__("empty tfstate data")


class MalformedDocumentError(TfstateError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"failed to unmarshal tfstate: {reason}")
        self.reason = reason


class MissingVersionError(TfstateError):
    def __init__(self) -> None:
        super().__init__("invalid tfstate: missing version field")


class MissingTerraformVersionError(TfstateError):
    def __init__(self) -> None:
        super().__init__("invalid tfstate: missing terraform_version field")


MissingToolVersionError = MissingTerraformVersionError


def _load_json(data: Union[bytes, str]) -> Any:
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(f"invalid UTF-8: {exc}") from exc
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(str(exc)) from exc


def parse_tfstate(data: Union[bytes, str]) -> TerraformState:
    """Decode and validate a Terraform state payload.

    Args:
        data: Raw state file contents, as bytes or already-decoded text.

    Returns:
        TerraformState: The decoded state; `resources` is empty if absent.

    Raises:
        EmptyInputError: If `data` has zero length.
        MalformedDocumentError: If `data` is not JSON, or not a JSON object
            shaped like a state document.
        MissingVersionError: If `version` is absent or 0.
        MissingTerraformVersionError: If `terraform_version` is absent or "".
    """
    if len(data) == 0:
        raise EmptyInputError()

    payload = _load_json(data)
    if not isinstance(payload, dict):
        raise MalformedDocumentError(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    try:
        state = validate_type(payload, TerraformState)
    except ValueError as exc:
        raise MalformedDocumentError(str(exc)) from exc

    if state.version == 0:
        raise MissingVersionError()

    if not state.terraform_version:
        raise MissingTerraformVersionError()

    logger.debug(
        "Decoded tfstate v%d (terraform %s, serial %d) with %d resources",
        state.version,
        state.terraform_version,
        state.serial,
        state.resource_count(),
    )
    return state
