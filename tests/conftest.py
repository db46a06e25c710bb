import json
from typing import Any, Dict, List, Optional

import pytest

AWS = 'provider["registry.terraform.io/hashicorp/aws"]'


def make_resource(
    type_: str,
    name: str,
    instances: Optional[List[Dict[str, Any]]] = None,
    mode: str = "managed",
    provider: str = AWS,
    module: Optional[str] = None,
    depends_on: Optional[List[str]] = None,
) -> Dict[str, Any]:
    resource: Dict[str, Any] = {
        "mode": mode,
        "type": type_,
        "name": name,
        "provider": provider,
        "instances": instances if instances is not None else [{"attributes": {}}],
    }
    if module is not None:
        resource["module"] = module
    if depends_on is not None:
        resource["depends_on"] = depends_on
    return resource


def make_state(resources: List[Dict[str, Any]], **extra: Any) -> Dict[str, Any]:
    state: Dict[str, Any] = {
        "version": 4,
        "terraform_version": "1.5.0",
        "serial": 7,
        "lineage": "3f6b2a1c-0000-4000-8000-000000000000",
        "outputs": {},
        "resources": resources,
    }
    state.update(extra)
    return state


def to_bytes(doc: Any) -> bytes:
    return json.dumps(doc).encode("utf-8")


@pytest.fixture
def sample_state() -> Dict[str, Any]:
    """One VPC in the root module and one instance under module.app that references it."""
    return make_state(
        [
            make_resource(
                "aws_vpc",
                "main",
                instances=[
                    {
                        "schema_version": 1,
                        "attributes": {
                            "id": "vpc-0a1b2c",
                            "arn": "arn:aws:ec2:us-east-1:123456789012:vpc/vpc-0a1b2c",
                            "cidr_block": "10.0.0.0/16",
                            "tags": {"Name": "main"},
                        },
                    }
                ],
            ),
            make_resource(
                "aws_instance",
                "web",
                module="module.app",
                instances=[
                    {
                        "schema_version": 1,
                        "attributes": {"id": "i-1234567890", "password": "hunter2"},
                        "private": "eyJzY2hlbWFfdmVyc2lvbiI6IjEifQ==",
                        "dependencies": ["aws_vpc.main"],
                    }
                ],
            ),
        ],
        outputs={
            "vpc_id": {"value": "vpc-0a1b2c", "type": "string"},
            "db_password": {"value": "s3cret", "type": "string", "sensitive": True},
        },
    )


@pytest.fixture
def sample_bytes(sample_state: Dict[str, Any]) -> bytes:
    return to_bytes(sample_state)
