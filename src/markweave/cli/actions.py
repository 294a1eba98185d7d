#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markweave/cli/actions.py
"""Custom argparse Action classes for the markweave CLI.

Every option can take its default from an environment variable named
``MARKWEAVE_<DEST>``, where ``<DEST>`` is the option's destination in upper
case (``--extension-set`` reads ``MARKWEAVE_EXTENSION_SET``). Values given on
the command line always win over the environment.
"""

import argparse
import logging
import os

from markweave.constants import ENV_PREFIX

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


def env_key(dest: str) -> str:
    """Return the environment variable name for an option destination."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_options(option_strings, strip_no_prefix=False):
    """Derive the destination name from option strings like ``--log-level``."""
    for option in option_strings:
        if strip_no_prefix and option.startswith("--no-"):
            return option[5:].replace("-", "_")
        if option.startswith("--"):
            return option[2:].replace("-", "_")
        if option.startswith("-"):
            return option[1:]
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action that takes its default from the environment.

    The environment value goes through the argument's ``type`` and must be one
    of its ``choices`` when those are configured. Invalid values are logged
    and ignored.
    """

    def __init__(self, option_strings, dest, **kwargs):
        env_name = env_key(dest)
        env_value = os.environ.get(env_name)
        if env_value is not None:
            try:
                kwargs["default"] = self._convert_env_value(env_value, kwargs.get("type"), kwargs.get("choices"))
            except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                logger.warning("Invalid environment variable %s=%s: %s", env_name, env_value, e)

        super().__init__(option_strings, dest, **kwargs)

    @staticmethod
    def _convert_env_value(env_value, value_type, choices):
        """Convert environment variable string to the argument's type."""
        value = value_type(env_value) if value_type is not None else env_value
        if choices is not None and value not in choices:
            raise ValueError(f"must be one of {', '.join(map(str, choices))}")
        return value

    def __call__(self, parser, namespace, values, option_string=None):
        """Standard action processing."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag that takes its default from the environment."""

    def __init__(self, option_strings, dest, **kwargs):
        env_value = os.environ.get(env_key(dest))
        if env_value is not None:
            kwargs["default"] = env_value.lower() in TRUE_VALUES

        super().__init__(option_strings, dest, **kwargs)


class EnvironmentAwareBooleanFalseAction(argparse._StoreFalseAction):
    """Negative flag (``--no-*``) that takes its default from the environment.

    The environment variable holds the positive setting:
    ``MARKWEAVE_DEFAULT_SYNTAXES=false`` has the same effect as
    ``--no-default-syntaxes``.
    """

    def __init__(self, option_strings, dest, **kwargs):
        env_value = os.environ.get(env_key(dest))
        if env_value is not None:
            kwargs["default"] = env_value.lower() in TRUE_VALUES

        super().__init__(option_strings, dest, **kwargs)


class PositiveIntAction(EnvironmentAwareAction):
    """Store action that only accepts positive integers."""

    def __init__(self, option_strings, dest, **kwargs):
        kwargs.setdefault("type", _positive_int)
        super().__init__(option_strings, dest, **kwargs)


def _positive_int(value):
    ivalue = int(value)
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument whose default may come from the environment.

    The environment-aware action is chosen from the ``action`` keyword;
    other custom actions are passed through unchanged.
    """
    action = kwargs.get("action", "store")

    if "dest" not in kwargs:
        dest = _dest_from_options(args, strip_no_prefix=action == "store_false")
        if dest is not None:
            kwargs["dest"] = dest

    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action == "store_false":
        kwargs["action"] = EnvironmentAwareBooleanFalseAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction

    return parser.add_argument(*args, **kwargs)
