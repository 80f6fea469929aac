"""Exception hierarchy for the language-model classifier collaborator."""

from __future__ import annotations


class ClassifierError(Exception):
    """Base exception for all classifier errors."""


class ClassifierUnavailableError(ClassifierError):
    """The classifier endpoint could not be reached or returned an HTTP error."""


class MalformedClassifierResponseError(ClassifierError):
    """The classifier answered with something that does not fit the contract."""
