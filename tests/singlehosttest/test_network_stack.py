import aws_cdk as cdk
from aws_cdk import assertions

from singlehostinfra.network_stack import NetworkStack


def _network_template() -> assertions.Template:
    app = cdk.App()
    stack = NetworkStack(app, "NetworkStack")
    return assertions.Template.from_stack(stack)


def test_vpc_address_space():
    template = _network_template()
    template.resource_count_is("AWS::EC2::VPC", 1)
    template.has_resource_properties("AWS::EC2::VPC", {"CidrBlock": "10.0.0.0/16"})


def test_public_and_private_tiers():
    template = _network_template()
    subnets = template.find_resources("AWS::EC2::Subnet")
    subnet_types = sorted(
        tag["Value"]
        for subnet in subnets.values()
        for tag in subnet["Properties"]["Tags"]
        if tag["Key"] == "aws-cdk:subnet-type"
    )
    assert subnet_types == ["Private", "Private", "Public", "Public"]


def test_vpc_id_output():
    template = _network_template()
    template.has_output("VpcId", {"Description": "VPC ID of the application network"})
