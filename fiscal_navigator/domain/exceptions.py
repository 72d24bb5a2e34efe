"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class SimulationInputError(DomainException):
    """Simulation input is malformed or out of range"""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(", ".join(messages))


class AdvisoryUnavailableError(DomainException):
    """Advisory text service returned an error or is unavailable"""

    pass


class ConfigurationError(DomainException):
    """Rate or bracket configuration is missing or inconsistent"""

    pass


class CalculationError(DomainException):
    """A regime calculator could not produce a finite result"""

    pass
