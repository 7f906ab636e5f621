#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2dom library.

Exception Hierarchy
-------------------
- Md2DomError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - ParsingError (markdown adapter and front matter failures)

  - RenderingError (script generation failures)
    - MissingSelfBindingError (node exits without its own identifier)
    - MissingParentBindingError (parent has no identifier to attach to)
    - UnexpectedNodeShapeError (payload or children not as a handler expects)
    - OutputWriteError (file write failures)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations

from typing import Any


class Md2DomError(Exception):
    """Base exception class for all md2dom-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Md2DomError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class
    received_type : type
        The options class that was received

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(Md2DomError):
    """Exception raised when markdown input or its front matter cannot be turned into a tree."""

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Md2DomError):
    """Exception raised when a node tree cannot be rendered to a script.

    A rendering error always aborts the whole conversion; the statements
    emitted before the failure are discarded.

    Parameters
    ----------
    message : str
        Description of the rendering error
    node_kind : str, optional
        Kind of the node being rendered when the error occurred
    parent_kind : str, optional
        Kind of that node's parent, when it has one

    """

    def __init__(
        self,
        message: str,
        node_kind: str | None = None,
        parent_kind: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error with node context."""
        super().__init__(message, original_error=original_error)
        self.node_kind = node_kind
        self.parent_kind = parent_kind


class MissingSelfBindingError(RenderingError):
    """A node reached its exit phase without a recorded identifier."""

    def __init__(self, node_kind: str, parent_kind: str | None = None):
        """Initialize the error for ``node_kind``."""
        super().__init__(
            f"{node_kind}: no identifier recorded for the node itself",
            node_kind=node_kind,
            parent_kind=parent_kind,
        )


class MissingParentBindingError(RenderingError):
    """A node's parent has no recorded identifier to attach the node to."""

    def __init__(self, node_kind: str, parent_kind: str | None = None, identifier: str | None = None):
        """Initialize the error for ``node_kind`` under ``parent_kind``."""
        parent = parent_kind or "no parent"
        message = f"{node_kind}: no identifier recorded for parent ({parent})"
        if identifier:
            message += f" of {identifier}"
        super().__init__(message, node_kind=node_kind, parent_kind=parent_kind)
        self.identifier = identifier


class UnexpectedNodeShapeError(RenderingError):
    """A handler's assumption about a node's payload or children does not hold."""


class OutputWriteError(RenderingError):
    """Exception raised when rendered output cannot be written.

    Parameters
    ----------
    message : str
        Description of the write failure
    output_path : str, optional
        Destination that could not be written

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        super().__init__(message, original_error=original_error)
        self.output_path = output_path


class DependencyError(Md2DomError):
    """Exception raised when a required package is missing or too old.

    Parameters
    ----------
    converter_name : str
        Name of the component that needs the dependency
    missing_packages : list of tuple
        ``(install_name, version_spec)`` pairs that could not be imported
    version_mismatches : list of tuple, optional
        ``(install_name, required, installed)`` triples

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error."""
        version_mismatches = version_mismatches or []
        if message is None:
            lines = [f"'{converter_name}' requires additional packages."]
            if missing_packages:
                names = ", ".join(f"{name}{spec}" for name, spec in missing_packages)
                lines.append(f"Missing: {names}")
            for name, required, installed in version_mismatches:
                lines.append(f"{name} {required} required, {installed} installed")
            install = " ".join(f'"{name}{spec}"' for name, spec in missing_packages)
            install += "".join(f' "{name}{required}"' for name, required, _ in version_mismatches)
            lines.append(f"Install with: pip install {install.strip()}")
            message = "\n".join(lines)
        super().__init__(message, original_error=original_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
