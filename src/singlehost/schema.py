"""
Schema definitions for the single-host application infrastructure.

This module provides the configuration class consumed by the application
stack, and the settings layer that resolves it from CDK context and
environment variables.
"""

import ipaddress
from logging import getLogger
from typing import Any, Optional, Tuple

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._unpack_tags import unpack_tags

logger = getLogger(__name__)

env_prefix = "SINGLEHOST_"

REQUIRED_KEYS = ("instance_type", "ssh_cidr_range", "key_pair_name", "s3_bucket_name")


class _ApplicationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", env_prefix=env_prefix
    )
    instance_type: Optional[str] = None
    ssh_cidr_range: Optional[str] = None
    key_pair_name: Optional[str] = None
    s3_bucket_name: Optional[str] = None
    extra_tags_str: Optional[str] = None  # in the format "key1=value1;key2=value2"


class ApplicationConfig(BaseModel, frozen=True):
    """
    Configuration for the application stack.

    Attributes:
        instance_type: EC2 instance type identifier, e.g. t3.micro.
            Not checked against the provider catalog.
        ssh_cidr_range: IPv4 CIDR range allowed to reach the instance over SSH
        key_pair_name: name of an existing EC2 key pair
        s3_bucket_name: name of an existing S3 bucket the instance may use
        extra_tags: tuple of 2-tuples of additional tags
    """

    instance_type: str
    ssh_cidr_range: str
    key_pair_name: str
    s3_bucket_name: str
    extra_tags: Tuple[Tuple[str, str], ...] = ()

    @field_validator("instance_type", "key_pair_name", "s3_bucket_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("ssh_cidr_range")
    @classmethod
    def _ipv4_cidr(cls, value: str) -> str:
        _, _, prefix = value.partition("/")
        # Netmask and hostmask forms parse as networks but are not CIDR notation
        if not (prefix.isascii() and prefix.isdigit() and len(prefix) <= 2):
            raise ValueError(f"'{value}' must include a prefix length, e.g. /32")
        try:
            ipaddress.IPv4Network(value, strict=False)
        except ValueError as e:
            raise ValueError(f"'{value}' is not an IPv4 CIDR range: {e}")
        return value

    @classmethod
    def from_settings(cls, **kwargs):
        """Create an instance from environment settings with optional overrides."""
        settings = _ApplicationSettings()

        params: dict[str, Any] = {
            "instance_type": settings.instance_type,
            "ssh_cidr_range": settings.ssh_cidr_range,
            "key_pair_name": settings.key_pair_name,
            "s3_bucket_name": settings.s3_bucket_name,
            "extra_tags": unpack_tags(settings.extra_tags_str),
        }

        # Override with any provided kwargs
        params.update({k: v for k, v in kwargs.items() if v is not None})

        missing = [key for key in REQUIRED_KEYS if params[key] is None]
        if missing:
            raise ValueError(
                "Missing configuration: "
                + ", ".join(
                    f"{key} (context key '{key}' or environment variable"
                    f" {env_prefix}{key.upper()})"
                    for key in missing
                )
            )

        logger.debug(f"Resolved application configuration: {params}")

        return cls(**params)

    @classmethod
    def from_context(cls, node, **kwargs):
        """Create an instance from CDK context, falling back to environment settings.

        Args:
            node: construct node to read context from, usually ``app.node``.
            **kwargs: overrides applied on top of context values.
        """
        params: dict[str, Any] = {key: node.try_get_context(key) for key in REQUIRED_KEYS}

        extra_tags_str = node.try_get_context("extra_tags")
        if extra_tags_str is not None:
            params["extra_tags"] = unpack_tags(extra_tags_str)

        params.update(kwargs)

        return cls.from_settings(**params)
