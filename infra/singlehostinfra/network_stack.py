"""Network stack - the VPC the application instance is placed in."""

from logging import getLogger

import aws_cdk as cdk
import aws_cdk.aws_ec2 as ec2
from constructs import Construct

logger = getLogger(__name__)


class NetworkStack(cdk.Stack):
    """Creates the VPC with a public and a private subnet tier."""

    def __init__(self, scope: Construct, id: str, **kwargs) -> None:
        super().__init__(scope, id, **kwargs)

        logger.info(f"Declaring network stack {id}")

        self.vpc = ec2.Vpc(
            self,
            "Vpc",
            ip_addresses=ec2.IpAddresses.cidr("10.0.0.0/16"),
            max_azs=2,
            nat_gateways=1,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=24,
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                    cidr_mask=24,
                ),
            ],
        )

        # Instances are placed here
        self.public_subnets = self.vpc.public_subnets

        cdk.CfnOutput(
            self,
            "VpcId",
            value=self.vpc.vpc_id,
            description="VPC ID of the application network",
        )
