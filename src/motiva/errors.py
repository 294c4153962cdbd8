"""
Exceptions raised by the Motiva workout engine.
"""


class MotivaError(Exception):
    """Base class for all Motiva errors"""


class DayPlanUnavailableError(MotivaError, LookupError):
    """No day plan exists for the requested date"""


class PlanGenerationError(MotivaError):
    """The plan generator could not produce a usable plan"""

    def __init__(self, error: str, details: str = ""):
        super().__init__(f"{error}: {details}" if details else error)
        self.error = error
        self.details = details


class StoreError(MotivaError):
    """A document store request failed"""
