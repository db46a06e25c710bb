"""
terrascope/models/terraform_state.py

Holds the pydantic models for a raw Terraform state document (the `.tfstate`
file format, not the `terraform show -json` output):

 - OutputValue: a root-module output.
 - ResourceInstance: one concrete instance of a resource (count/for_each).
 - ResourceState: one declared resource with its instances.
 - TerraformState: the top-level document.

JSON `null` on any list or mapping field is read as the empty value, so the
graph code never has to guard against None collections.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, field_validator

IndexKey = Optional[Union[StrictInt, StrictStr]]


def index_key_text(key: IndexKey) -> str:
    """Render a non-null index key the way Terraform prints it in an address."""
    if key is None:
        raise ValueError("Absent index key has no textual form.")
    return str(key)


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _none_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


class ResourceMode(str, Enum):
    managed = "managed"
    data = "data"


class OutputValue(BaseModel):
    """Represents a Terraform output value as stored in the state file.

    Attributes:
        value: Arbitrary data from the Terraform output.
        type: Terraform type descriptor, a string or a nested list structure.
        sensitive: True if the output is marked sensitive.
    """

    value: Any = None
    type: Any = None
    sensitive: StrictBool = False

    @field_validator("sensitive", mode="before")
    @classmethod
    def validate_sensitive(cls, value: Any) -> Any:
        return False if value is None else value


class ResourceInstance(BaseModel):
    """One instance of a resource.

    Attributes:
        schema_version: Provider schema version of the attributes.
        attributes: Provider attributes of the instance.
        attributes_flat: Legacy flat attributes, kept but never read.
        private: Opaque provider blob.
        dependencies: Addresses this instance references (implicit deps).
        index_key: count index or for_each key; None for single instances.
    """

    schema_version: StrictInt = 0
    attributes: Dict[str, Any] = Field(default_factory=dict)
    attributes_flat: Dict[str, str] = Field(default_factory=dict)
    private: str = ""
    dependencies: List[str] = Field(default_factory=list)
    index_key: IndexKey = None

    @field_validator("attributes", "attributes_flat", mode="before")
    @classmethod
    def validate_mappings(cls, value: Any) -> Any:
        return _none_as_empty_dict(value)

    @field_validator("dependencies", mode="before")
    @classmethod
    def validate_dependencies(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    @field_validator("schema_version", mode="before")
    @classmethod
    def validate_schema_version(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("private", mode="before")
    @classmethod
    def validate_private(cls, value: Any) -> Any:
        return "" if value is None else value


class ResourceState(BaseModel):
    """A resource declaration and its instances.

    `module` is the module address (e.g. "module.app.module.db"), empty for
    the root module. `depends_on` lists the explicit dependencies. `mode` is
    the only required field: a resource without a known mode is rejected.
    """

    mode: ResourceMode
    type: str = ""
    name: str = ""
    provider: str = ""
    module: str = ""
    instances: List[ResourceInstance] = Field(default_factory=list)
    depends_on: List[str] = Field(default_factory=list)

    @field_validator("instances", "depends_on", mode="before")
    @classmethod
    def validate_lists(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    @field_validator("type", "name", "provider", "module", mode="before")
    @classmethod
    def validate_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    def is_multi_instance(self) -> bool:
        """True when the resource expands to more than one instance."""
        return len(self.instances) > 1


class TerraformState(BaseModel):
    """Represents a Terraform state document.

    `version` and `terraform_version` default to their zero values here; the
    decoder in `terrascope.parser.tfstate` rejects documents that leave them
    unset.

    Attributes:
        version: State format version (4 for current Terraform).
        terraform_version: The Terraform version that wrote the state.
        serial: Monotonic write counter.
        lineage: Opaque identifier shared by all states of one workspace.
        outputs: Mapping of output name -> OutputValue.
        resources: Resource declarations in document order.
    """

    version: StrictInt = 0
    terraform_version: str = ""
    serial: StrictInt = 0
    lineage: str = ""
    outputs: Dict[str, OutputValue] = Field(default_factory=dict)
    resources: List[ResourceState] = Field(default_factory=list)

    @field_validator("version", "serial", mode="before")
    @classmethod
    def validate_counters(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("terraform_version", "lineage", mode="before")
    @classmethod
    def validate_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("outputs", mode="before")
    @classmethod
    def validate_outputs(cls, value: Any) -> Any:
        return _none_as_empty_dict(value)

    @field_validator("resources", mode="before")
    @classmethod
    def validate_resources(cls, value: Any) -> Any:
        return _none_as_empty_list(value)

    def resource_count(self) -> int:
        """Return the number of resource declarations."""
        return len(self.resources)

    def is_empty(self) -> bool:
        """Check if this Terraform state contains zero resources.

        Returns:
            True if no resources are present, otherwise False.
        """
        return self.resource_count() == 0
