"""
Translation Outcome Data Classes

A provider attempt ends in exactly one of Success or Failure.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TranslationRequest:
    """One text to translate into one target language."""
    text: str
    target_language: str

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


@dataclass(frozen=True)
class Success:
    """A provider returned a usable translation."""
    text: str
    provider: str = ""

    ok = True


@dataclass(frozen=True)
class Failure:
    """A provider raised or returned nothing usable."""
    provider: str
    reason: str

    ok = False


TranslationOutcome = Union[Success, Failure]
