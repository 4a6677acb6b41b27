"""Wires the network and application stacks into a CDK app."""

from logging import getLogger
from typing import Optional, Tuple

import aws_cdk as cdk

from singlehost.schema import ApplicationConfig

from .application_stack import ApplicationStack
from .network_stack import NetworkStack

logger = getLogger(__name__)

PROJECT_TAG = "singlehost"


def compose(
    app: cdk.App, config: Optional[ApplicationConfig] = None
) -> Tuple[NetworkStack, ApplicationStack]:
    """Declare the network stack, then the application stack inside it.

    If no config is given it is read from the app's context, with
    environment variables as fallback.
    """
    if config is None:
        config = ApplicationConfig.from_context(app.node)

    env = cdk.Environment(
        account=app.node.try_get_context("account"),
        region=app.node.try_get_context("region"),
    )

    tags = {"Project": PROJECT_TAG}
    tags.update(dict(config.extra_tags))

    network = NetworkStack(app, "NetworkStack", env=env, tags=tags)
    application = ApplicationStack(
        app,
        "ApplicationStack",
        vpc=network.vpc,
        config=config,
        env=env,
        tags=tags,
    )
    application.add_dependency(network)

    logger.debug(f"Composed stacks {network.stack_name} -> {application.stack_name}")

    return network, application
