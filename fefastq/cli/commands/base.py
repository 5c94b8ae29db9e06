"""Building blocks for fefastq subcommands."""

__all__ = ["BaseCommand", "Group", "Option"]

import abc
import argparse
from typing import Any


class Option:
    """
    A reusable command line option

    :param args: Either a name or a list of options strings, e.g., 'foo' or '-f', '--foo'
    :param kwargs: Any named arguments accepted by argparse.add_argument()
    """

    def __init__(self, *args: str, **kwargs: Any):
        self.args: tuple[str, ...] = args
        self.kwargs: dict[str, Any] = kwargs

    def add_to_parser(self, parser: argparse.ArgumentParser | argparse._ArgumentGroup):
        parser.add_argument(*self.args, **self.kwargs)


class Group:
    """
    A named set of options shared by several subcommands. They are shown
    together under their own heading in the subcommand's help.

    :param name: Title of the group.
    :param description: Description of the group.
    """
    def __init__(self, name: str, description: str | None = None):
        self.name = name
        self.description = description
        self.options: list[Option] = []

    def add_argument(self, *args: Any, **kwargs: Any):
        """
        Add an option to the group

        :param args: Either a name or a list of option strings
        :param kwargs: Any named argument accepted by argparse.add_argument()
        """
        self.options.append(Option(*args, **kwargs))

    def add_to_parser(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group(title=self.name, description=self.description)
        for option in self.options:
            option.add_to_parser(group)


class BaseCommand(abc.ABC):
    """
    A CLI subcommand

    Modules in fefastq.cli.commands that define a ``Command`` subclass of this
    class are registered as subcommands automatically.

    :param parser: The subcommand's own argument parser.
    """
    name: str | None = None
    """
    Name of the subcommand. Defaults to the module name.
    """

    description: str | None = None
    """
    The subcommand's help string. If not given, __doc__ will be used.
    """

    groups: list[Group] | None = None
    """
    Shared option groups to add to the subcommand.
    """
    def __init__(self, parser: argparse.ArgumentParser):
        if self.groups:
            for group in self.groups:
                group.add_to_parser(parser)
        self.add_arguments(parser)

    @abc.abstractmethod
    def add_arguments(self, parser: argparse.ArgumentParser):
        """
        Add the options specific to this subcommand.

        :param parser: The parser to add arguments to
        """

    @abc.abstractmethod
    def execute(self, arguments: argparse.Namespace):
        """
        Run the subcommand.

        :param arguments: The namespace with arguments and their values.
        """

    @classmethod
    def register_to(cls, subparsers: argparse._SubParsersAction, name: str | None):
        """
        Adds this subcommand's parser to the main parser.

        :param subparsers: argparse object representing subparsers.
        :param name: Name of the subcommand. If not given, the class attribute 'name' is used.
        """
        cmd_name = name or cls.name
        help_text = cls.description or cls.__doc__
        parser = subparsers.add_parser(cmd_name, description=help_text, help=help_text)
        command = cls(parser)
        parser.set_defaults(cmd_handler=command.execute)
        parser.set_defaults(cmd_name=cmd_name)
