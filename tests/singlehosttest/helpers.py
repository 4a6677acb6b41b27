from typing import Any, Tuple

import aws_cdk as cdk

from singlehostinfra.application_stack import ApplicationStack
from singlehostinfra.composition import compose
from singlehostinfra.network_stack import NetworkStack


def demo_context() -> dict[str, Any]:
    return {
        "instance_type": "t3.micro",
        "ssh_cidr_range": "203.0.113.0/24",
        "key_pair_name": "demo-key",
        "s3_bucket_name": "demo-bucket",
    }


def build_stacks(**context_overrides) -> Tuple[NetworkStack, ApplicationStack]:
    context = demo_context()
    context.update(context_overrides)
    return compose(cdk.App(context=context))


def single_resource(template, resource_type: str) -> Tuple[str, dict[str, Any]]:
    resources = template.find_resources(resource_type)
    assert len(resources) == 1, f"expected one {resource_type}, got {list(resources)}"
    return next(iter(resources.items()))
