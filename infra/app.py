"""CDK application entry point for the single-host application.

This module initializes the AWS CDK application and declares the
network stack followed by the application stack.
"""
import logging

import aws_cdk as cdk
from singlehostinfra.composition import compose

logging.basicConfig(level=logging.INFO)

app = cdk.App()

network_stack, application_stack = compose(app)

app.synth()
