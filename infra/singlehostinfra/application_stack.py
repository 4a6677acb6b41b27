"""Module for defining the single-host application using AWS CDK.

This module contains the CDK stack definition for one EC2 instance serving
a placeholder web page, with an IAM role scoped to a single S3 bucket,
a security group allowing HTTP/HTTPS from anywhere and SSH from a
configured range, and an Elastic IP.

Inputs are taken as given; an unknown instance type, key pair or bucket
only fails when CloudFormation realizes the template.
"""

from logging import getLogger

import aws_cdk as cdk
import aws_cdk.aws_ec2 as ec2
import aws_cdk.aws_iam as iam
from constructs import Construct

from singlehost.schema import ApplicationConfig

logger = getLogger(__name__)

BOOTSTRAP_COMMANDS = (
    'echo "Hello, World!" > index.html && nohup python3 -m http.server 80 &',
)


def bootstrap_user_data() -> ec2.UserData:
    """User data writing a greeting page and serving it on port 80."""
    user_data = ec2.UserData.for_linux()
    user_data.add_commands(*BOOTSTRAP_COMMANDS)
    return user_data


def bucket_policy(bucket_name: str) -> iam.PolicyDocument:
    """List access to the bucket and object read/write within it, nothing else."""
    bucket_arn = f"arn:aws:s3:::{bucket_name}"
    return iam.PolicyDocument(
        statements=[
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["s3:ListBucket"],
                resources=[bucket_arn],
            ),
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["s3:*Object"],
                resources=[f"{bucket_arn}/*"],
            ),
        ]
    )


class ApplicationStack(cdk.Stack):
    """CDK Stack for the single-host application.

    Emits the ApplicationURL and ApplicationIP outputs.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        vpc: ec2.IVpc,
        config: ApplicationConfig,
        **kwargs,
    ) -> None:
        """Initialize the application stack.

        Args:
            scope: The parent construct.
            id: The construct ID.
            vpc: The VPC whose public subnets host the instance.
            config: Instance type, SSH range, key pair and bucket.
            **kwargs: Additional keyword arguments passed to the parent Stack.
        """
        super().__init__(scope, id, **kwargs)

        self.config = config

        logger.info(
            f"Declaring application stack {id}: {config.instance_type} instance,"
            f" key pair {config.key_pair_name}, bucket {config.s3_bucket_name}"
        )

        # Permissions
        self.role = iam.Role(
            self,
            "ApplicationRole",
            assumed_by=iam.ServicePrincipal("ec2.amazonaws.com"),
            inline_policies={
                "s3BucketAccess": bucket_policy(config.s3_bucket_name),
            },
        )

        self.user_data = bootstrap_user_data()

        # Changing the user data yields a new logical ID, so the instance is replaced
        self.instance = ec2.Instance(
            self,
            "ApplicationInstance",
            machine_image=ec2.MachineImage.latest_amazon_linux2023(),
            instance_type=ec2.InstanceType(config.instance_type),
            vpc=vpc,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC),
            key_pair=ec2.KeyPair.from_key_pair_name(
                self, "ApplicationKeyPair", config.key_pair_name
            ),
            role=self.role,
            user_data=self.user_data,
            user_data_causes_replacement=True,
        )

        self.instance.connections.allow_from_any_ipv4(
            ec2.Port.tcp(80), "Global HTTP Access"
        )
        self.instance.connections.allow_from_any_ipv4(
            ec2.Port.tcp(443), "Global HTTPS Access"
        )
        self.instance.connections.allow_from(
            ec2.Peer.ipv4(config.ssh_cidr_range),
            ec2.Port.tcp(22),
            "Restricted SSH Access",
        )

        self.eip = ec2.CfnEIP(
            self,
            "ApplicationEIP",
            domain="vpc",
            instance_id=self.instance.instance_id,
        )

        self.url_output = cdk.CfnOutput(
            self,
            "ApplicationURL",
            value=f"http://{self.eip.ref}",
            description="URL of the application.",
        )

        self.ip_output = cdk.CfnOutput(
            self,
            "ApplicationIP",
            value=self.eip.ref,
            description="IP Address of the application instance.",
        )
