"""Request bodies sent to the SDK daemon."""

from dataclasses import dataclass


@dataclass
class PrintBody:
    text: str


@dataclass
class SpinnerStartBody:
    text: str


@dataclass
class SpinnerStopBody:
    text: str


@dataclass
class ProgressBarStartBody:
    """Body for progress-bar/start.

    Attributes:
        length: Total number of units in the bar
        initial: Units filled when the bar appears
        text: Label shown next to the bar
    """

    length: int
    initial: int
    text: str


@dataclass
class ProgressBarAdvanceBody:
    increment: int


@dataclass
class ProgressBarStopBody:
    text: str


@dataclass
class GetSecretBody:
    key: str


@dataclass
class SetSecretBody:
    key: str
    value: str
