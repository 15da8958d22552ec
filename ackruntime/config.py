"""Command-line configuration of a service controller."""

from __future__ import annotations

import argparse
import json
import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

FLAG_ENABLE_LEADER_ELECTION = "enable-leader-election"
FLAG_METRICS_ADDR = "metrics-addr"
FLAG_ENABLE_DEV_LOGGING = "enable-development-logging"
FLAG_AWS_REGION = "aws-region"
FLAG_AWS_ENDPOINT_URL = "aws-endpoint-url"
FLAG_LOG_LEVEL = "log-level"
FLAG_RESOURCE_TAGS = "resource-tags"
FLAG_WATCH_NAMESPACE = "watch-namespace"
FLAG_ENABLE_WEBHOOK_SERVER = "enable-webhook-server"
FLAG_WEBHOOK_SERVER_ADDR = "webhook-server-addr"
ENV_VAR_AWS_REGION = "AWS_REGION"

LOGGER_NAME = "ackruntime"

_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


class ConfigError(Exception):
    """The controller configuration is invalid or incomplete."""


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {text!r}")


class _AppendCommaSeparated(argparse.Action):
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        items = list(getattr(namespace, self.dest) or [])
        if values:
            items.extend(values.split(","))
        setattr(namespace, self.dest, items)


def _add_bool(parser: argparse.ArgumentParser, flag: str, dest: str, help: str) -> None:
    parser.add_argument(
        f"--{flag}",
        dest=dest,
        nargs="?",
        const=True,
        default=False,
        type=_parse_bool,
        help=help,
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the controller's runtime options."""
    parser = argparse.ArgumentParser(description="AWS service controller")
    parser.add_argument(
        f"--{FLAG_METRICS_ADDR}",
        dest="metrics_addr",
        default="0.0.0.0:8080",
        help="The address the metric endpoint binds to.",
    )
    _add_bool(
        parser,
        FLAG_ENABLE_WEBHOOK_SERVER,
        "enable_webhook_server",
        "Enable webhook server for controller manager.",
    )
    parser.add_argument(
        f"--{FLAG_WEBHOOK_SERVER_ADDR}",
        dest="webhook_server_addr",
        default="0.0.0.0:9433",
        help="The address the webhook endpoint binds to.",
    )
    _add_bool(
        parser,
        FLAG_ENABLE_LEADER_ELECTION,
        "enable_leader_election",
        "Enable leader election for controller manager. "
        "Enabling this will ensure there is only one active controller manager.",
    )
    _add_bool(
        parser,
        FLAG_ENABLE_DEV_LOGGING,
        "enable_development_logging",
        "Use a human-readable development log format at debug level; "
        "otherwise a JSON production format is used.",
    )
    parser.add_argument(
        f"--{FLAG_AWS_REGION}",
        dest="region",
        default=os.environ.get(ENV_VAR_AWS_REGION, ""),
        help="The AWS Region in which the service controller will create its resources",
    )
    parser.add_argument(
        f"--{FLAG_AWS_ENDPOINT_URL}",
        dest="endpoint_url",
        default="",
        help="The AWS endpoint URL the service controller will use to create its "
        "resources. Overrides the endpoint derived from service and region.",
    )
    parser.add_argument(
        f"--{FLAG_LOG_LEVEL}",
        dest="log_level",
        default="info",
        help="The log level. Default is info. Only info and debug are supported",
    )
    parser.add_argument(
        f"--{FLAG_RESOURCE_TAGS}",
        dest="resource_tags",
        action=_AppendCommaSeparated,
        default=None,
        help="Key/value pair tags the controller always sets on resources it manages.",
    )
    parser.add_argument(
        f"--{FLAG_WATCH_NAMESPACE}",
        dest="watch_namespace",
        default="",
        help="Specific namespace the service controller will watch for object "
        "creation from CRD. By default it will listen to all namespaces",
    )
    return parser


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname.lower(),
            "ts": record.created,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry)


@dataclass
class Config:
    """Configuration options for a service controller."""

    metrics_addr: str = "0.0.0.0:8080"
    enable_leader_election: bool = False
    enable_development_logging: bool = False
    account_id: str = ""
    region: str = ""
    endpoint_url: str = ""
    log_level: str = "info"
    resource_tags: list[str] = field(default_factory=list)
    watch_namespace: str = ""
    enable_webhook_server: bool = False
    webhook_server_addr: str = "0.0.0.0:9433"

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> Config:
        """Build a Config from command-line arguments."""
        ns = build_parser().parse_args(argv)
        return cls(
            metrics_addr=ns.metrics_addr,
            enable_leader_election=ns.enable_leader_election,
            enable_development_logging=ns.enable_development_logging,
            region=ns.region,
            endpoint_url=ns.endpoint_url,
            log_level=ns.log_level,
            resource_tags=list(ns.resource_tags or []),
            watch_namespace=ns.watch_namespace,
            enable_webhook_server=ns.enable_webhook_server,
            webhook_server_addr=ns.webhook_server_addr,
        )

    def setup_logger(self) -> logging.Logger:
        """Configure and return the controller's logger."""
        level = logging.DEBUG if self.log_level == "debug" else logging.INFO
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        handler = logging.StreamHandler()
        if self.enable_development_logging:
            handler.setFormatter(
                logging.Formatter("%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s")
            )
        else:
            handler.setFormatter(_JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
        return logger

    def set_aws_account_id(self, identity_provider: Callable[[], str]) -> None:
        """Look up the caller's AWS account ID and store it."""
        try:
            account = identity_provider()
        except Exception as exc:
            raise ConfigError(f"unable to get caller identity: {exc}") from exc
        self.account_id = account

    def validate(self, identity_provider: Callable[[], str]) -> None:
        """Check the options, raising ConfigError on the first problem found."""
        try:
            self.set_aws_account_id(identity_provider)
        except ConfigError as exc:
            raise ConfigError(f"unable to determine account ID: {exc}") from exc

        if not self.region:
            raise ConfigError(
                "unable to start service controller as AWS region is missing. "
                "Please pass --aws-region flag or set AWS_REGION environment variable"
            )

        if self.endpoint_url:
            try:
                endpoint = urlsplit(self.endpoint_url)
                host = endpoint.netloc.rpartition("@")[2]
            except ValueError as exc:
                raise ConfigError(
                    "invalid service endpoint. Please refer to the AWS service "
                    "endpoint documentation for more details"
                ) from exc
            if endpoint.scheme != "https" and host != "":
                raise ConfigError(
                    "invalid service endpoint. Please refer to the AWS service "
                    "endpoint documentation for more details"
                )

        if self.enable_webhook_server and not self.webhook_server_addr:
            raise ConfigError("empty webhook server address")